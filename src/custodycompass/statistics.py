import math
from datetime import date
from typing import Dict, Iterable, List, Optional

from dateutil.rrule import DAILY, rrule

from .calendar_logic import resolve_full
from .dates import DateLike, month_name, to_date
from .holidays import get_holiday
from .models import (
    HolidayCategory, HolidayImpactBreakdown, HolidayState, InServiceDayConfig, MonthlyBreakdown,
    Parent, ParentStats, ResolvedDay, ScheduleConfig, SchoolType, TrackBreak, YearlyStats,
)


def percentage(days: int, total: int) -> float:
    """
    Anteil mit 2 Nachkommastellen, kaufmännisch gerundet:
      182 / 365 -> 4986.30... -> 4986 -> 49.86
    """
    if not total:
        return 0.0
    return math.floor(days * 10000 / total + 0.5) / 100


def year_days(year: int) -> List[date]:
    return [dt.date() for dt in rrule(DAILY, dtstart=date(year, 1, 1), until=date(year, 12, 31))]


def resolve_year(year: int, schedule: ScheduleConfig,
                 holiday_state: Optional[HolidayState] = None,
                 in_service_days: Optional[Iterable[DateLike]] = None,
                 in_service_config: Optional[InServiceDayConfig] = None,
                 track_breaks: Optional[Iterable[TrackBreak]] = None,
                 school_type: Optional[SchoolType] = None) -> List[ResolvedDay]:
    in_service = {to_date(d) for d in in_service_days or ()}
    breaks = list(track_breaks or ())
    return [resolve_full(d, schedule, holiday_state, in_service, in_service_config,
                         breaks, school_type)
            for d in year_days(year)]


def summarize_days(year: int, days: Iterable[ResolvedDay]) -> YearlyStats:
    """Zählt Tage je Elternteil und Monat; Prozentwerte bezogen auf alle Tage."""
    monthly = [MonthlyBreakdown(month_name(m)) for m in range(1, 13)]
    parent_a = parent_b = 0

    for day in days:
        bucket = monthly[day.date.month - 1]
        if day.owner is Parent.PARENT_A:
            parent_a += 1
            bucket.parent_a_days += 1
        else:
            parent_b += 1
            bucket.parent_b_days += 1

    total = parent_a + parent_b
    return YearlyStats(
        year=year,
        parent_a=ParentStats(parent_a, percentage(parent_a, total)),
        parent_b=ParentStats(parent_b, percentage(parent_b, total)),
        monthly_breakdown=monthly,
    )


def calculate_yearly_stats(year: int, schedule: ScheduleConfig,
                           holiday_state: Optional[HolidayState] = None,
                           in_service_days: Optional[Iterable[DateLike]] = None,
                           in_service_config: Optional[InServiceDayConfig] = None,
                           track_breaks: Optional[Iterable[TrackBreak]] = None,
                           school_type: Optional[SchoolType] = None) -> YearlyStats:
    days = resolve_year(year, schedule, holiday_state, in_service_days, in_service_config,
                        track_breaks, school_type)
    return summarize_days(year, days)


_IMPACT_FIELDS: Dict[HolidayCategory, str] = {
    HolidayCategory.MAJOR_BREAK: 'major_breaks',
    HolidayCategory.WEEKEND: 'weekend_holidays',
    HolidayCategory.BIRTHDAY: 'birthdays',
    HolidayCategory.RELIGIOUS: 'religious',
}


def calculate_holiday_impact(year: int, schedule: ScheduleConfig,
                             holiday_state: HolidayState, **layers) -> HolidayImpactBreakdown:
    """Tage je Elternteil, die durch Feiertagsregeln zugeordnet werden, nach Kategorie."""
    breakdown = HolidayImpactBreakdown()
    for day in resolve_year(year, schedule, holiday_state, **layers):
        if not day.is_holiday_override:
            continue
        definition = get_holiday(day.holiday_id)
        category = definition.category if definition else HolidayCategory.BIRTHDAY
        getattr(breakdown, _IMPACT_FIELDS[category]).add(day.owner)
        breakdown.total.add(day.owner)
    return breakdown


def determine_primary_parent(stats: YearlyStats) -> Parent:
    """Elternteil mit dem größeren Anteil; bei Gleichstand Parent A."""
    if stats.parent_a.percentage >= stats.parent_b.percentage:
        return Parent.PARENT_A
    return Parent.PARENT_B
