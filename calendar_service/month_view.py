"""Calendar month view over scheduled incidents."""

from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import Field, computed_field

from dentalcare.schemas.base import CamelModel
from dentalcare.schemas.incident import Incident
from dentalcare.utils.timeutil import to_clinic_time

LOGGER = logging.getLogger(__name__)

INLINE_LIMIT = 2


class CalendarDay(CamelModel):
    """One day cell of the month grid."""

    day: date
    inline: List[Incident]
    overflow: int
    is_today: bool = False
    is_selected: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def overflow_label(self) -> Optional[str]:
        return f"+{self.overflow} more" if self.overflow else None


class MonthView(CamelModel):
    """A month grid plus the incidents of the selected day."""

    year: int
    month: int
    leading_blanks: int
    days: List[CalendarDay]
    selected_day: Optional[date] = None
    selected_incidents: List[Incident] = Field(default_factory=list)


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Return ``(year, month)`` moved by ``delta`` months."""

    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def bucket_by_day(
    incidents: Iterable[Incident],
    year: int,
    month: int,
    tz_name: str = "UTC",
) -> Dict[date, List[Incident]]:
    """Group incidents by local calendar day within the given month."""

    buckets: Dict[date, List[Incident]] = defaultdict(list)
    for item in incidents:
        local = to_clinic_time(item.appointment_date, tz_name)
        if local.year == year and local.month == month:
            buckets[local.date()].append(item)
    return buckets


def build_month_view(
    incidents: Iterable[Incident],
    year: int,
    month: int,
    *,
    selected: Optional[date] = None,
    today: Optional[date] = None,
    tz_name: str = "UTC",
) -> MonthView:
    """Lay out ``year``/``month`` with at most two inline entries per day.

    The selected day lists every incident on that day, whether or not it
    falls inside the displayed month.
    """

    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")

    items = list(incidents)
    buckets = bucket_by_day(items, year, month, tz_name)
    first_weekday, days_in_month = calendar.monthrange(year, month)

    days: List[CalendarDay] = []
    for number in range(1, days_in_month + 1):
        current = date(year, month, number)
        entries = buckets.get(current, [])
        days.append(
            CalendarDay(
                day=current,
                inline=entries[:INLINE_LIMIT],
                overflow=max(0, len(entries) - INLINE_LIMIT),
                is_today=current == today,
                is_selected=current == selected,
            )
        )

    selected_incidents: List[Incident] = []
    if selected is not None:
        selected_incidents = [
            item
            for item in items
            if to_clinic_time(item.appointment_date, tz_name).date() == selected
        ]

    LOGGER.debug(
        "Built month view %04d-%02d with %d populated days",
        year,
        month,
        len(buckets),
    )

    return MonthView(
        year=year,
        month=month,
        # Sunday-first grid
        leading_blanks=(first_weekday + 1) % 7,
        days=days,
        selected_day=selected,
        selected_incidents=selected_incidents,
    )
