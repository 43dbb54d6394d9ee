from datetime import date
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.orm import Session, joinedload
from typing import List
from app.core.database import get_db
from app.core.exceptions import MissingColumnsError, ParseError
from app.models.client import Client
from app.models.sale import Sale
from app.schemas.sale import (
    SaleCreate,
    SaleUpdate,
    SaleResponse,
    SaleBulkDelete,
    SaleBulkDeleteResponse,
)
from app.schemas.sales_import import ImportPreview, ImportSummary
from app.services.csv_records import EXPORT_COLUMNS, TEMPLATE_COLUMNS, decode_upload, write_csv
from app.services.sales_import import ImportPlan, commit_import, plan_import

router = APIRouter(prefix="/sales", tags=["sales"])

REQUIRED_SALE_FIELDS = ("date", "client_id", "amount", "method")


def csv_attachment(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def get_sale_or_404(db: Session, sale_id: int) -> Sale:
    sale = db.query(Sale).options(joinedload(Sale.client)).filter(Sale.id == sale_id).first()
    if not sale:
        raise HTTPException(status_code=404, detail="Sale not found")
    return sale


def ensure_client_exists(db: Session, client_id: int) -> None:
    if not db.query(Client.id).filter(Client.id == client_id).first():
        raise HTTPException(status_code=404, detail="Client not found")


def plan_upload(db: Session, file: UploadFile) -> ImportPlan:
    try:
        return plan_import(db, decode_upload(file.file.read()))
    except (ParseError, MissingColumnsError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("", response_model=List[SaleResponse])
def get_sales(db: Session = Depends(get_db)):
    """Получить список продаж с именами клиентов (новые сверху)"""
    return db.query(Sale).options(joinedload(Sale.client)).order_by(Sale.date.desc(), Sale.id.desc()).all()


@router.get("/export")
def export_sales(db: Session = Depends(get_db)):
    """Выгрузить все продажи в CSV"""
    sales = db.query(Sale).options(joinedload(Sale.client)).order_by(Sale.date.desc(), Sale.id.desc()).all()
    records = [
        {
            "id": sale.id,
            "date": sale.date.isoformat(),
            "clientId": sale.client_id,
            "clientName": sale.client_name,
            "amount": sale.amount,
            "method": sale.method,
            "note": sale.note,
        }
        for sale in sales
    ]
    return csv_attachment(write_csv(records, EXPORT_COLUMNS), f"sales-export-{date.today().isoformat()}.csv")


@router.get("/template")
def get_import_template():
    """Шаблон CSV для импорта с двумя строками-примерами"""
    rows = [
        {
            "date": date.today().isoformat(),
            "client": "Client Name",
            "amount": "100.00",
            "method": "Cash",
            "note": "Optional note about the sale",
        },
        {
            "date": "MM/DD/YYYY",  # Альтернативный формат даты
            "client": "Another Client",
            "amount": "250.50",
            "method": "Credit Card",
            "note": "Second example row",
        },
    ]
    return csv_attachment(write_csv(rows, TEMPLATE_COLUMNS), "sales-import-template.csv")


@router.post("/upload/preview", response_model=ImportPreview)
def preview_upload(
    file: UploadFile = File(...),
    db: Session = Depends(get_db)
):
    """Проверить файл и показать новых клиентов без записи в БД"""
    return plan_upload(db, file).preview()


@router.post("/upload", response_model=ImportSummary)
def upload_sales(
    file: UploadFile = File(...),
    create_clients: bool = Form(False, alias="createClients"),
    approved_clients: List[str] = Form([], alias="approvedClients"),
    db: Session = Depends(get_db)
):
    """
    Импорт продаж из CSV.

    Новые клиенты создаются только с согласия оператора: createClients=true
    одобряет всех найденных, approvedClients - только перечисленных.
    """
    plan = plan_upload(db, file)

    approved = approved_clients or (plan.new_clients if create_clients else [])
    return commit_import(db, plan, approved_clients=approved)


@router.post("/bulk-delete", response_model=SaleBulkDeleteResponse)
def bulk_delete_sales(
    payload: SaleBulkDelete,
    db: Session = Depends(get_db)
):
    """Удалить несколько продаж по списку ID"""
    deleted = db.query(Sale).filter(Sale.id.in_(payload.ids)).delete(synchronize_session=False)
    db.commit()
    return SaleBulkDeleteResponse(deleted=deleted)


@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(sale_id: int, db: Session = Depends(get_db)):
    """Получить продажу по ID"""
    return get_sale_or_404(db, sale_id)


@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
def create_sale(
    sale_data: SaleCreate,
    db: Session = Depends(get_db)
):
    """Создать продажу"""
    ensure_client_exists(db, sale_data.client_id)

    sale = Sale(**sale_data.model_dump())
    db.add(sale)
    db.commit()
    return get_sale_or_404(db, sale.id)


@router.put("/{sale_id}", response_model=SaleResponse)
def update_sale(
    sale_id: int,
    sale_update: SaleUpdate,
    db: Session = Depends(get_db)
):
    """Обновить продажу"""
    sale = get_sale_or_404(db, sale_id)

    updates = sale_update.model_dump(exclude_unset=True)
    for field in REQUIRED_SALE_FIELDS:
        if field in updates and updates[field] is None:
            raise HTTPException(status_code=422, detail=f"Field '{field}' cannot be null")
    if "client_id" in updates:
        ensure_client_exists(db, updates["client_id"])

    for field, value in updates.items():
        setattr(sale, field, value)

    db.commit()
    return get_sale_or_404(db, sale_id)


@router.delete("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sale(
    sale_id: int,
    db: Session = Depends(get_db)
):
    """Удалить продажу"""
    sale = get_sale_or_404(db, sale_id)
    db.delete(sale)
    db.commit()
    return None
