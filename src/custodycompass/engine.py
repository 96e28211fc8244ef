import copy
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from .calendar_logic import generate_month_grid, resolve_full
from .dates import DateLike, to_date
from .models import (
    HolidayImpactBreakdown, HolidayState, InServiceDayConfig, Parent, ResolvedDay,
    ScheduleConfig, SchoolType, TrackBreak, YearlyStats,
)
from .statistics import calculate_holiday_impact, summarize_days, year_days


@dataclass
class CustodyBundle:
    """Alle Eingaben der Auflösung in einem Objekt."""
    schedule: ScheduleConfig
    holiday_state: Optional[HolidayState] = None
    in_service_days: List[date] = field(default_factory=list)
    in_service_config: Optional[InServiceDayConfig] = None
    track_breaks: List[TrackBreak] = field(default_factory=list)
    school_type: Optional[SchoolType] = None

    def layers(self) -> dict:
        return {
            'holiday_state': self.holiday_state,
            'in_service_days': set(self.in_service_days),
            'in_service_config': self.in_service_config,
            'track_breaks': self.track_breaks,
            'school_type': self.school_type,
        }


class CustodyEngine:
    """
    Bindet eine Konfiguration und merkt sich bereits aufgelöste Tage.
    Die Konfiguration wird beim Anlegen kopiert, spätere Änderungen am
    übergebenen Bundle wirken sich daher nicht aus.
    """

    def __init__(self, bundle: CustodyBundle):
        self.bundle = copy.deepcopy(bundle)
        self._layers = self.bundle.layers()
        self._cache: Dict[date, ResolvedDay] = {}

    def resolve(self, day: DateLike) -> ResolvedDay:
        day = to_date(day)
        if day not in self._cache:
            self._cache[day] = resolve_full(day, self.bundle.schedule, **self._layers)
        return copy.copy(self._cache[day])

    def owner_for_date(self, day: DateLike) -> Parent:
        return self.resolve(day).owner

    def month_grid(self, year: int, month: int, week_starts_on: str = 'sunday',
                   today: Optional[date] = None) -> List[ResolvedDay]:
        return generate_month_grid(year, month, self.bundle.schedule, week_starts_on=week_starts_on,
                                   today=today, **self._layers)

    def yearly_stats(self, year: int) -> YearlyStats:
        return summarize_days(year, (self.resolve(d) for d in year_days(year)))

    def holiday_impact(self, year: int) -> HolidayImpactBreakdown:
        layers = dict(self._layers)
        holiday_state = layers.pop('holiday_state') or HolidayState()
        return calculate_holiday_impact(year, self.bundle.schedule, holiday_state, **layers)
