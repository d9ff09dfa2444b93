from datetime import datetime
from typing import Optional

from alumni.core.config import settings
from alumni.core.exceptions import InvalidGraduationYearError


def graduation_year_bounds(now: Optional[datetime] = None) -> tuple:
    """Inclusive (min, max) accepted graduation years"""
    current_year = (now or datetime.utcnow()).year
    return settings.MIN_GRADUATION_YEAR, current_year + settings.GRADUATION_YEAR_LOOKAHEAD


def validate_graduation_year(year: int) -> int:
    low, high = graduation_year_bounds()
    if year < low or year > high:
        raise InvalidGraduationYearError(year)
    return year
