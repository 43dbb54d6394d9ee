"""
Чтение и запись CSV для импорта/экспорта продаж.

Разбор строгий: строка с числом ячеек, отличным от заголовка, делает файл
некорректным целиком (ParseError). Пустые строки пропускаются, значения и
имена колонок обрезаются по краям.
"""
import csv
import io
from typing import Dict, Iterable, List, Mapping, NamedTuple, Sequence, Tuple

from app.core.exceptions import ParseError

# Колонки экспорта: (ключ записи, заголовок в файле)
EXPORT_COLUMNS: List[Tuple[str, str]] = [
    ("id", "Sale ID"),
    ("date", "Date"),
    ("clientId", "Client ID"),
    ("clientName", "Client Name"),
    ("amount", "Amount"),
    ("method", "Payment Method"),
    ("note", "Note"),
]

TEMPLATE_COLUMNS: List[Tuple[str, str]] = [
    ("date", "date"),
    ("client", "client"),
    ("amount", "amount"),
    ("method", "method"),
    ("note", "note"),
]

# Заголовки экспорта -> имена колонок импорта, чтобы выгрузку можно было загрузить обратно
HEADER_ALIASES: Dict[str, str] = {label: key for key, label in EXPORT_COLUMNS}


class CsvTable(NamedTuple):
    columns: List[str]
    rows: List[Dict[str, str]]


def is_blank_line(row: List[str]) -> bool:
    return not row or (len(row) == 1 and not row[0].strip())


def decode_upload(content: bytes) -> str:
    """Декодировать загруженный файл (UTF-8, BOM допускается)"""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError("File is not valid UTF-8 text") from exc


def parse_csv(text: str) -> CsvTable:
    """Разобрать CSV с заголовком в список словарей {колонка: значение}."""
    if text.startswith("\ufeff"):
        text = text[1:]

    try:
        raw_rows = list(csv.reader(io.StringIO(text), strict=True))
    except csv.Error as exc:
        raise ParseError(f"Malformed CSV: {exc}") from exc

    # Пропускаются только пустые строки; строка из одних запятых остаётся записью
    raw_rows = [row for row in raw_rows if not is_blank_line(row)]
    if not raw_rows:
        raise ParseError("CSV file is empty")

    columns = [HEADER_ALIASES.get(name.strip(), name.strip()) for name in raw_rows[0]]
    if not any(columns):
        raise ParseError("CSV header row is empty")

    rows: List[Dict[str, str]] = []
    for index, raw in enumerate(raw_rows[1:], start=2):
        if len(raw) != len(columns):
            raise ParseError(
                f"Row {index} has {len(raw)} fields, header has {len(columns)}"
            )
        rows.append({name: cell.strip() for name, cell in zip(columns, raw) if name})

    return CsvTable(columns=[name for name in columns if name], rows=rows)


def write_csv(records: Iterable[Mapping[str, object]], columns: Sequence[Tuple[str, str]]) -> str:
    """Сериализовать записи в CSV с заданным порядком колонок"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([label for _, label in columns])
    for record in records:
        writer.writerow(["" if record.get(key) is None else record.get(key) for key, _ in columns])
    return buffer.getvalue()
