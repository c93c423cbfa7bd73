# arqueos/utils/dates.py
import calendar
from datetime import date, datetime, time
from typing import Optional

YMD = "%Y-%m-%d"


def parse_ymd(value) -> Optional[date]:
    """Fecha ISO yyyy-MM-dd -> date. Cualquier otra cosa -> None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        return None
    try:
        return datetime.strptime(str(value).strip(), YMD).date()
    except ValueError:
        return None


def to_ymd(value: date) -> str:
    return value.strftime(YMD)


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min)


def end_of_day(value: date) -> datetime:
    return datetime.combine(value, time.max)


def month_start(today: Optional[date] = None) -> date:
    today = today or date.today()
    return today.replace(day=1)


def month_end(today: Optional[date] = None) -> date:
    today = today or date.today()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=last_day)
