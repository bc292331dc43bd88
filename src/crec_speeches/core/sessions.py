"""Date windows of the congressional sessions known to the crawler."""
from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Tuple, Union
import logging

from ..errors import ConfigurationError
from .types import DateRange

LOGGER = logging.getLogger(__name__)

DEFAULT_CONGRESS_SESSION = 117

DateLike = Union[date, str]

SESSION_DATES: Dict[int, Tuple[date, date]] = {
    118: (date(2023, 1, 3), date(2025, 1, 3)),
    117: (date(2021, 1, 3), date(2023, 1, 3)),
    116: (date(2019, 1, 3), date(2021, 1, 3)),
    115: (date(2017, 1, 3), date(2019, 1, 3)),
    114: (date(2015, 1, 6), date(2017, 1, 3)),
    113: (date(2013, 1, 3), date(2015, 1, 3)),
    112: (date(2011, 1, 3), date(2013, 1, 3)),
    111: (date(2009, 1, 6), date(2011, 1, 3)),
    110: (date(2007, 1, 4), date(2009, 1, 3)),
    109: (date(2005, 1, 4), date(2007, 1, 3)),
    108: (date(2003, 1, 7), date(2005, 1, 3)),
    107: (date(2001, 1, 3), date(2003, 1, 3)),
    106: (date(1999, 1, 6), date(2001, 1, 3)),
    105: (date(1997, 1, 7), date(1999, 1, 3)),
    104: (date(1995, 1, 4), date(1997, 1, 3)),
}


def _parse_date(value: DateLike, label: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ConfigurationError(f"Invalid {label} {value!r}, expected YYYY-MM-DD") from exc


def resolve_session_dates(
    congress_session: int,
    date_from: Optional[DateLike] = None,
    date_to: Optional[DateLike] = None,
) -> DateRange:
    """Return the date window to crawl for ``congress_session``.

    An explicit ``date_from``/``date_to`` pair always wins over the lookup
    table. When only one bound is given the other one is taken from the
    session table, so a partial range still requires a known session.
    """

    try:
        session_number = int(congress_session)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid congressional session {congress_session!r}") from exc

    if date_from is not None and date_to is not None:
        start = _parse_date(date_from, "date_from")
        end = _parse_date(date_to, "date_to")
    else:
        known = SESSION_DATES.get(session_number)
        if known is None:
            raise ConfigurationError(
                f"Unknown or unsupported congressional session {congress_session}. "
                "Please specify date_from and date_to manually."
            )
        start = _parse_date(date_from, "date_from") if date_from is not None else known[0]
        end = _parse_date(date_to, "date_to") if date_to is not None else known[1]
        if date_from is None and date_to is None:
            LOGGER.info("Using session %s dates: %s to %s", session_number, start, end)

    if start > end:
        raise ConfigurationError(f"date_from {start} lies after date_to {end}")
    return DateRange(start=start, end=end)


__all__ = ["DEFAULT_CONGRESS_SESSION", "SESSION_DATES", "resolve_session_dates"]
