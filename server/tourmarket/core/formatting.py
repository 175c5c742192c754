"""Locale-aware presentation helpers."""

from datetime import datetime
from typing import Optional

from babel.dates import format_date, format_time


def format_long_datetime(value: Optional[datetime], locale: str) -> Optional[str]:
    """
    Render a date-time as weekday, full date and 24h time in ``locale``.

    ``es`` gives e.g. ``lunes, 15 de diciembre de 2025 9:00``.
    """
    if value is None:
        return None
    return f"{format_date(value, format='full', locale=locale)} {format_time(value, 'H:mm', locale=locale)}"
