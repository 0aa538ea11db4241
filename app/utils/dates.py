import calendar
from datetime import date
from typing import Optional


def add_months(d: date, months: int = 1) -> date:
    """
    Calendar-month step, clamped to the end of the target month:
    2025-01-31 + 1 -> 2025-02-28
    """
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def is_overdue(next_payment_due: Optional[date], status: Optional[str], today: Optional[date] = None) -> bool:
    if next_payment_due is None or status == "completed":
        return False
    return next_payment_due < (today or date.today())
