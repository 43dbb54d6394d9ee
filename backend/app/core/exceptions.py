"""
Доменные ошибки приложения.

Маршруты переводят их в HTTP-ответы: ошибки разбора и структуры файла -> 400,
ошибки записи в БД -> 500. Построчные ошибки импорта (дата, клиент) не
поднимаются наружу, а собираются в список пропущенных строк.
"""
from typing import List


class SalesAdminError(Exception):
    """Базовая ошибка приложения"""


class ParseError(SalesAdminError):
    """Файл не является корректной CSV-таблицей"""


class MissingColumnsError(SalesAdminError):
    """В заголовке CSV нет обязательных колонок"""

    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__(f"CSV is missing required fields: {', '.join(missing)}")


class InvalidDateError(SalesAdminError, ValueError):
    """Строку нельзя превратить в календарную дату"""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid date: {value!r}")


class StorageError(SalesAdminError):
    """Ошибка записи в БД во время пакетной вставки.

    `inserted` - сколько строк уже записано (и не будет откатано).
    """

    def __init__(self, message: str, inserted: int = 0):
        self.inserted = inserted
        super().__init__(message)
