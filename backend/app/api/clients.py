from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.core.database import get_db
from app.schemas.client import ClientCreate, ClientResponse, ClientOption
from app.models.client import Client

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=List[ClientResponse])
def get_clients(db: Session = Depends(get_db)):
    """Получить список клиентов"""
    return db.query(Client).order_by(Client.client_name).all()


@router.get("/lookup", response_model=List[ClientOption])
def get_client_options(db: Session = Depends(get_db)):
    """Id и имена клиентов для выпадающего списка в форме продажи"""
    return db.query(Client).order_by(Client.client_name).all()


@router.post("", response_model=ClientResponse, status_code=201)
def create_client(
    client_data: ClientCreate,
    db: Session = Depends(get_db)
):
    """Создать нового клиента"""
    client = Client(
        client_name=client_data.client_name,
        rate=client_data.rate or 1,
        no_of_staff=client_data.no_of_staff or 1,
    )
    db.add(client)
    db.commit()
    db.refresh(client)
    return client
