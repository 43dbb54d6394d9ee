import datetime as dt
from decimal import Decimal
from pydantic import Field, field_validator
from app.schemas.base import CamelModel


def clean_client_name(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Client name is required")
    return value


class ClientBase(CamelModel):
    client_name: str = Field(min_length=1)

    strip_client_name = field_validator("client_name")(clean_client_name)


class ClientCreate(ClientBase):
    """Быстрое добавление клиента: ставка и штат по умолчанию = 1"""
    rate: Decimal | None = Field(default=None, ge=0)
    no_of_staff: int | None = Field(default=None, ge=0)


class RateCreate(ClientBase):
    rate: Decimal = Field(ge=0)
    no_of_staff: int | None = Field(default=None, ge=0)
    date: dt.date | None = None


class ClientUpdate(CamelModel):
    client_name: str | None = Field(default=None, min_length=1)
    rate: Decimal | None = Field(default=None, ge=0)
    no_of_staff: int | None = Field(default=None, ge=0)
    date: dt.date | None = None

    strip_client_name = field_validator("client_name")(clean_client_name)


class ClientResponse(CamelModel):
    id: int
    client_name: str
    rate: Decimal
    no_of_staff: int
    date: dt.date | None = None
    created_at: dt.datetime | None = None


class ClientOption(CamelModel):
    id: int
    client_name: str
