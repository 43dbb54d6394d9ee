"""
Скрипт для заполнения БД тестовыми данными
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.database import SessionLocal, Base, engine
from app.models.client import Client
from app.models.sale import Sale

logger = logging.getLogger("seed_data")


def seed_data():
    Base.metadata.create_all(bind=engine)
    db: Session = SessionLocal()

    try:
        # Создаем клиентов
        clients_data = [
            {"client_name": "Acme Corp", "rate": Decimal("45.00"), "no_of_staff": 3},
            {"client_name": "Globex", "rate": Decimal("60.00"), "no_of_staff": 5},
            {"client_name": "Initech", "rate": Decimal("38.50"), "no_of_staff": 2},
        ]

        clients = []
        for client_data in clients_data:
            existing = db.query(Client).filter(Client.client_name == client_data["client_name"]).first()
            if not existing:
                existing = Client(**client_data)
                db.add(existing)
            clients.append(existing)
        db.flush()

        # Создаем продажи за последние две недели, если их еще нет
        if db.query(Sale.id).first() is None:
            methods = ["Cash", "Credit Card", "Bank Transfer"]
            today = date.today()
            for offset in range(14):
                client = clients[offset % len(clients)]
                db.add(Sale(
                    date=today - timedelta(days=offset),
                    client_id=client.id,
                    amount=Decimal(100 + offset * 25),
                    method=methods[offset % len(methods)],
                    note="Seed data" if offset == 0 else None,
                ))

        db.commit()
        logger.info("Seed data created successfully")

    except SQLAlchemyError:
        db.rollback()
        logger.exception("Seed data failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_data()
