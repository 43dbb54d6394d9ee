"""
Импорт продаж из CSV.

Работает в два шага, чтобы решение о создании новых клиентов принимал
оператор, а не код импорта:

    plan = plan_import(db, text)          # ничего не пишет в БД
    summary = commit_import(db, plan, approved_clients=plan.new_clients)

plan_import проверяет заголовок, сопоставляет строки с клиентами и разбирает
даты. Строки с неизвестным именем клиента откладываются. commit_import
создаёт одобренных клиентов, повторно сопоставляет отложенные строки и
пишет продажи пачками по IMPORT_BATCH_SIZE. Каждая пачка коммитится отдельно:
при ошибке в середине уже записанные пачки остаются в БД.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import InvalidDateError, MissingColumnsError, StorageError
from app.models.client import Client
from app.models.sale import Sale
from app.schemas.sales_import import ImportPreview, ImportSummary, NewClientStats
from app.services.client_resolver import (
    CLIENT_ID_COLUMN,
    CLIENT_NAME_COLUMNS,
    ClientSnapshot,
    ResolutionStatus,
    resolve_client,
)
from app.services.csv_records import parse_csv
from app.services.dates import normalize_date

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "amount", "method")
FIRST_DATA_ROW = 2  # Номер первой строки данных (заголовок = 1)


@dataclass
class DeferredRow:
    """Строка, ожидающая создания клиента"""
    row_number: int
    client_name: str
    date: date
    amount: Decimal
    method: str
    note: Optional[str]

    def to_record(self, client_id: int) -> Dict[str, Any]:
        return {
            "date": self.date,
            "client_id": client_id,
            "amount": self.amount,
            "method": self.method,
            "note": self.note,
        }


@dataclass
class ImportPlan:
    total_rows: int
    snapshot: ClientSnapshot
    write_ready: List[Dict[str, Any]] = field(default_factory=list)
    deferred: List[DeferredRow] = field(default_factory=list)
    new_clients: List[str] = field(default_factory=list)
    skipped_rows: List[int] = field(default_factory=list)

    def preview(self) -> ImportPreview:
        return ImportPreview(
            total_rows=self.total_rows,
            ready_rows=len(self.write_ready),
            new_clients=list(self.new_clients),
            skipped_rows=sorted(self.skipped_rows),
        )


def find_missing_columns(columns: Sequence[str]) -> List[str]:
    missing = []
    client_columns = (CLIENT_ID_COLUMN,) + CLIENT_NAME_COLUMNS
    if not any(column in columns for column in client_columns):
        missing.append("/".join(client_columns))
    missing.extend(column for column in REQUIRED_COLUMNS if column not in columns)
    return missing


def parse_amount(value: Optional[str]) -> Decimal:
    """Сумма из CSV; нераспознанное значение превращается в 0"""
    try:
        amount = Decimal((value or "").replace(",", "").strip())
    except InvalidOperation:
        return Decimal(0)
    return amount if amount.is_finite() else Decimal(0)


def chunked(items: Sequence[Any], size: int) -> Iterator[Sequence[Any]]:
    if size <= 0:
        raise ValueError("Batch size must be positive")
    for start in range(0, len(items), size):
        yield items[start:start + size]


def plan_import(db: Session, text: str) -> ImportPlan:
    """Первый проход по файлу. Ничего не записывает в БД."""
    table = parse_csv(text)

    missing = find_missing_columns(table.columns)
    if missing:
        raise MissingColumnsError(missing)

    plan = ImportPlan(total_rows=len(table.rows), snapshot=ClientSnapshot.load(db))
    seen_new_clients = set()

    for row_number, row in enumerate(table.rows, start=FIRST_DATA_ROW):
        resolution = resolve_client(row, plan.snapshot)
        if resolution.status == ResolutionStatus.INVALID:
            plan.skipped_rows.append(row_number)
            continue

        try:
            sale_date = normalize_date(row.get("date"))
        except InvalidDateError:
            plan.skipped_rows.append(row_number)
            continue

        amount = parse_amount(row.get("amount"))
        method = row.get("method", "")
        note = row.get("note") or None

        if resolution.status == ResolutionStatus.RESOLVED:
            plan.write_ready.append({
                "date": sale_date,
                "client_id": resolution.client_id,
                "amount": amount,
                "method": method,
                "note": note,
            })
            continue

        # Неизвестный клиент: строка пропущена, пока клиента не создадут
        plan.skipped_rows.append(row_number)
        plan.deferred.append(DeferredRow(
            row_number=row_number,
            client_name=resolution.client_name,
            date=sale_date,
            amount=amount,
            method=method,
            note=note,
        ))
        key = resolution.client_name.lower()
        if key not in seen_new_clients:
            seen_new_clients.add(key)
            plan.new_clients.append(resolution.client_name)

    return plan


def create_clients(db: Session, names: Sequence[str], snapshot: ClientSnapshot, batch_size: int) -> int:
    """Создать клиентов со ставкой и штатом по умолчанию, дописать их в снимок"""
    created = 0
    for chunk in chunked(names, batch_size):
        clients = [Client(client_name=name, rate=1, no_of_staff=1) for name in chunk]
        try:
            db.add_all(clients)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Failed to create clients after %s created", created)
            raise StorageError(f"Failed to create clients: {exc}") from exc
        for client in clients:
            snapshot.add(client.id, client.client_name)
        created += len(clients)
    return created


def write_in_batches(db: Session, records: Sequence[Dict[str, Any]], batch_size: int) -> Tuple[int, int]:
    """
    Вставить продажи пачками, по коммиту на пачку.

    Returns:
        (количество вставленных строк, количество пачек)

    Raises:
        StorageError: пачка не записалась; предыдущие пачки остаются в БД
    """
    inserted = 0
    batches = 0
    for chunk in chunked(records, batch_size):
        try:
            db.add_all([Sale(**record) for record in chunk])
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Sales batch %s failed, %s rows already inserted", batches + 1, inserted)
            raise StorageError(f"Failed to insert batch {batches + 1}: {exc}", inserted=inserted) from exc
        inserted += len(chunk)
        batches += 1
        logger.debug("Sales batch %s inserted (%s rows)", batches, len(chunk))
    return inserted, batches


def commit_import(
    db: Session,
    plan: ImportPlan,
    approved_clients: Iterable[str] = (),
    batch_size: Optional[int] = None,
) -> ImportSummary:
    """Второй проход: создать одобренных клиентов и записать продажи"""
    batch_size = batch_size or settings.IMPORT_BATCH_SIZE

    approved = {name.strip().lower() for name in approved_clients}
    to_create = [name for name in plan.new_clients if name.lower() in approved]
    added = create_clients(db, to_create, plan.snapshot, batch_size) if to_create else 0

    write_ready = list(plan.write_ready)
    skipped = set(plan.skipped_rows)
    for row in plan.deferred:
        client_id = plan.snapshot.find_by_name(row.client_name)
        if client_id is None:
            continue
        write_ready.append(row.to_record(client_id))
        skipped.discard(row.row_number)

    count, batches = write_in_batches(db, write_ready, batch_size)

    summary = ImportSummary(
        success=True,
        count=count,
        skipped_rows=sorted(skipped),
        new_clients=NewClientStats(total=len(plan.new_clients), added=added) if plan.new_clients else None,
        batches=batches,
    )
    logger.info(
        "Sales import finished: %s inserted in %s batches, %s skipped, new clients %s/%s",
        summary.count, summary.batches, len(summary.skipped_rows), added, len(plan.new_clients),
    )
    return summary
