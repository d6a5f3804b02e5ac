"""Date manipulation utilities"""

from datetime import date
from dateutil.relativedelta import relativedelta


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping to month end (Jan 31 + 1 month = Feb 28/29)"""
    return from_date + relativedelta(months=months)


def resolve_today(today: date | None) -> date:
    """Use the injected date, falling back to the wall clock"""
    return today if today is not None else date.today()
