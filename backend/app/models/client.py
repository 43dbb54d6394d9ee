from datetime import date

from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Client(Base):
    """Клиент (он же запись ставки в разделе Rates)"""
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    client_name = Column(String, nullable=False, index=True)  # Уникальность не проверяется на уровне БД
    rate = Column(Numeric(10, 2), nullable=False, default=1)
    no_of_staff = Column(Integer, nullable=False, default=1)
    date = Column(Date, nullable=True, default=date.today)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    sales = relationship("Sale", back_populates="client")
