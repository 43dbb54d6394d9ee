import re
from datetime import date

from dateutil import parser as dateparser

from app.core.exceptions import InvalidDateError

US_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def normalize_date(value: str | None) -> date:
    """
    Преобразовать строку из CSV в дату.

    MM/DD/YYYY разбирается явно (американский порядок), всё остальное
    отдаётся dateutil. Неоднозначные форматы вроде DD.MM.YYYY не
    обрабатываются специально: результат зависит от dateutil.
    """
    value = (value or "").strip()
    if not value:
        raise InvalidDateError(value)

    match = US_DATE_RE.match(value)
    if match:
        month, day, year = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError as exc:
            raise InvalidDateError(value) from exc

    try:
        return dateparser.parse(value).date()
    except (ValueError, OverflowError) as exc:
        raise InvalidDateError(value) from exc
