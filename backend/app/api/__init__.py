from fastapi import APIRouter
from app.api import clients, rates, sales, statistics

api_router = APIRouter()
api_router.include_router(clients.router, prefix="/api")
api_router.include_router(rates.router, prefix="/api")
api_router.include_router(sales.router, prefix="/api")
api_router.include_router(statistics.router, prefix="/api")
