from app.models.client import Client
from app.models.sale import Sale

__all__ = [
    "Client",
    "Sale",
]
