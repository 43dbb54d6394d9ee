from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import datetime, timedelta
from typing import Optional
from decimal import Decimal

from app.core.database import get_db
from app.models.client import Client
from app.models.sale import Sale

router = APIRouter(prefix="/statistics", tags=["statistics"])

MAX_DAILY_SPAN_DAYS = 366  # Максимальный период для графика по дням


def parse_day(value: Optional[str], name: str):
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {name}, expected YYYY-MM-DD")


@router.get("/rates")
def get_rate_statistics(db: Session = Depends(get_db)):
    """Сводка по ставкам: число клиентов, средняя и максимальная ставка, общий штат"""
    total_clients, average_rate, highest_rate, total_staff = db.query(
        func.count(func.distinct(Client.client_name)),
        func.avg(Client.rate),
        func.max(Client.rate),
        func.sum(Client.no_of_staff),
    ).one()

    return {
        'totalClients': total_clients or 0,
        'averageRate': float(average_rate or 0),
        'highestRate': float(highest_rate or 0),
        'totalStaff': int(total_staff or 0),
    }


@router.get("/sales")
def get_sales_statistics(
    start_date: Optional[str] = Query(None, description="Start date (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="End date (YYYY-MM-DD)"),
    db: Session = Depends(get_db)
):
    """Статистика продаж за период."""
    start = parse_day(start_date, "start_date")
    end = parse_day(end_date, "end_date")
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")
    if start and end and (end - start).days + 1 > MAX_DAILY_SPAN_DAYS:
        raise HTTPException(
            status_code=400,
            detail=f"Period is too long, at most {MAX_DAILY_SPAN_DAYS} days"
        )

    # Фильтры по датам
    filters = []
    if start:
        filters.append(Sale.date >= start)
    if end:
        filters.append(Sale.date <= end)

    total_sales, total_amount = db.query(
        func.count(Sale.id),
        func.sum(Sale.amount)
    ).filter(*filters).one()
    total_amount = total_amount or Decimal('0')

    # Средний чек
    average_amount = Decimal('0')
    if total_sales:
        average_amount = Decimal(total_amount) / total_sales

    # Разбивка по способам оплаты
    method_stats = db.query(
        Sale.method,
        func.count(Sale.id).label('count'),
        func.sum(Sale.amount).label('total_amount')
    ).filter(*filters).group_by(Sale.method).order_by(
        func.sum(Sale.amount).desc()
    ).all()

    by_method = [
        {
            'method': method,
            'count': count,
            'totalAmount': float(amount or 0)
        }
        for method, count, amount in method_stats
    ]

    # Топ клиенты по объему
    top_clients = db.query(
        Client.id,
        Client.client_name,
        func.sum(Sale.amount).label('total_amount'),
        func.count(Sale.id).label('sales_count')
    ).join(Sale).filter(*filters).group_by(Client.id, Client.client_name).order_by(
        func.sum(Sale.amount).desc()
    ).limit(5).all()

    top_clients_list = [
        {
            'clientId': client_id,
            'clientName': name,
            'totalAmount': float(amount or 0),
            'salesCount': sales_count
        }
        for client_id, name, amount, sales_count in top_clients
    ]

    # Статистика по дням (для графика)
    daily_stats = []
    if start and end:
        per_day = {
            day: (amount, count)
            for day, amount, count in db.query(
                Sale.date,
                func.sum(Sale.amount),
                func.count(Sale.id)
            ).filter(*filters).group_by(Sale.date).all()
        }
        for offset in range((end - start).days + 1):
            current = start + timedelta(days=offset)
            amount, count = per_day.get(current, (0, 0))
            daily_stats.append({
                'date': current.isoformat(),
                'amount': float(amount or 0),
                'sales': count
            })

    return {
        'totalSales': total_sales,
        'totalAmount': float(total_amount),
        'averageAmount': float(average_amount),
        'byMethod': by_method,
        'topClients': top_clients_list,
        'daily': daily_stats
    }
