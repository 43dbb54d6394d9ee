import os

# Приложение создает таблицы при импорте - подменяем БД до импорта app.*
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.main import app
from app.models.client import Client
from app.models.sale import Sale

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_client(db_session):
    """Создать клиента напрямую в БД"""
    def _make(name: str, rate: str = "1", no_of_staff: int = 1) -> Client:
        record = Client(client_name=name, rate=Decimal(rate), no_of_staff=no_of_staff, date=date(2024, 1, 1))
        db_session.add(record)
        db_session.commit()
        db_session.refresh(record)
        return record
    return _make


@pytest.fixture
def make_sale(db_session):
    def _make(client_id: int, amount: str = "10.00", sale_date: date = date(2024, 3, 1), method: str = "Cash") -> Sale:
        record = Sale(date=sale_date, client_id=client_id, amount=Decimal(amount), method=method)
        db_session.add(record)
        db_session.commit()
        db_session.refresh(record)
        return record
    return _make
