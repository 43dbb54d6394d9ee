from app.schemas.client import ClientCreate, RateCreate, ClientUpdate, ClientResponse, ClientOption
from app.schemas.sale import SaleCreate, SaleUpdate, SaleResponse, SaleBulkDelete, SaleBulkDeleteResponse
from app.schemas.sales_import import ImportSummary, ImportPreview, NewClientStats

__all__ = [
    "ClientCreate",
    "RateCreate",
    "ClientUpdate",
    "ClientResponse",
    "ClientOption",
    "SaleCreate",
    "SaleUpdate",
    "SaleResponse",
    "SaleBulkDelete",
    "SaleBulkDeleteResponse",
    "ImportSummary",
    "ImportPreview",
    "NewClientStats",
]
