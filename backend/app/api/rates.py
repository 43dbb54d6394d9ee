from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from app.core.database import get_db
from app.models.client import Client
from app.models.sale import Sale
from app.schemas.client import RateCreate, ClientUpdate, ClientResponse

router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("", response_model=List[ClientResponse])
def get_rates(db: Session = Depends(get_db)):
    """Получить список ставок (новые сверху)"""
    return db.query(Client).order_by(Client.date.desc(), Client.id.desc()).all()


@router.get("/{rate_id}", response_model=ClientResponse)
def get_rate(rate_id: int, db: Session = Depends(get_db)):
    """Получить ставку по ID"""
    client = db.query(Client).filter(Client.id == rate_id).first()
    if not client:
        raise HTTPException(status_code=404, detail="Rate not found")
    return client


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_rate(
    rate_data: RateCreate,
    db: Session = Depends(get_db)
):
    """Создать ставку"""
    client = Client(
        client_name=rate_data.client_name,
        rate=rate_data.rate,
        no_of_staff=rate_data.no_of_staff or 1,
        date=rate_data.date or date.today(),
    )
    db.add(client)
    db.commit()
    db.refresh(client)
    return client


@router.put("/{rate_id}", response_model=ClientResponse)
def update_rate(
    rate_id: int,
    rate_update: ClientUpdate,
    db: Session = Depends(get_db)
):
    """Обновить ставку"""
    client = db.query(Client).filter(Client.id == rate_id).first()
    if not client:
        raise HTTPException(status_code=404, detail="Rate not found")

    for field, value in rate_update.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(client, field, value)

    db.commit()
    db.refresh(client)
    return client


@router.delete("/{rate_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rate(
    rate_id: int,
    db: Session = Depends(get_db)
):
    """Удалить ставку (клиента без продаж)"""
    client = db.query(Client).filter(Client.id == rate_id).first()
    if not client:
        raise HTTPException(status_code=404, detail="Rate not found")

    # Каскадного удаления нет: продажи клиента остались бы без ссылки
    if db.query(Sale.id).filter(Sale.client_id == rate_id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Client has sales and cannot be deleted"
        )

    db.delete(client)
    db.commit()
    return None
