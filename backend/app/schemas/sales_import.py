from typing import List
from app.schemas.base import CamelModel


class NewClientStats(CamelModel):
    total: int  # Сколько новых имён клиентов найдено в файле
    added: int  # Сколько из них создано


class ImportSummary(CamelModel):
    success: bool
    count: int
    skipped_rows: List[int]
    new_clients: NewClientStats | None = None
    batches: int


class ImportPreview(CamelModel):
    """Результат первого прохода: ничего не записано"""
    total_rows: int
    ready_rows: int
    new_clients: List[str]
    skipped_rows: List[int]
