import datetime as dt
from decimal import Decimal
from typing import List
from pydantic import Field
from app.schemas.base import CamelModel


class SaleBase(CamelModel):
    date: dt.date
    client_id: int
    amount: Decimal
    method: str
    note: str | None = None


class SaleCreate(SaleBase):
    method: str = Field(min_length=1)


class SaleUpdate(CamelModel):
    date: dt.date | None = None
    client_id: int | None = None
    amount: Decimal | None = None
    method: str | None = Field(default=None, min_length=1)
    note: str | None = None


class SaleResponse(SaleBase):
    id: int
    client_name: str | None = None


class SaleBulkDelete(CamelModel):
    ids: List[int] = Field(min_length=1)


class SaleBulkDeleteResponse(CamelModel):
    deleted: int
