"""
Erweiterung von Feiertagen auf angrenzende Wochenendtage.

Manche Feiertage (4. Juli, Veterans Day) umfassen je nach Wochentag das
ganze Wochenende:
  - 4. Juli an einem Freitag  -> Fr-So
  - 4. Juli an einem Dienstag -> nur der 4. Juli
Halloween bleibt immer ein einzelner Tag.
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from .dates import DateLike, add_days, to_date

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)


class ExpansionMode(str, Enum):
    NONE = 'none'
    FULL_WEEKEND = 'full-weekend'
    INCLUDE_FRIDAY = 'include-friday'
    INCLUDE_MONDAY = 'include-monday'


@dataclass(frozen=True)
class Always:
    days: int


@dataclass(frozen=True)
class WeekendAdjacent:
    mode: ExpansionMode


@dataclass(frozen=True)
class DayOfWeekRule:
    weekdays: Tuple[int, ...]     # 0=Montag … 6=Sonntag
    mode: ExpansionMode


@dataclass(frozen=True)
class DayOfWeekConditional:
    rules: Tuple[DayOfWeekRule, ...]


ExpansionRule = Union[Always, WeekendAdjacent, DayOfWeekConditional]


# Fr/Sa/Mo -> ganzes Wochenende, So -> ab Freitag, Di-Do -> nur der Tag
LONG_WEEKEND_EXPANSION = DayOfWeekConditional(rules=(
    DayOfWeekRule((FRIDAY,), ExpansionMode.FULL_WEEKEND),
    DayOfWeekRule((SATURDAY,), ExpansionMode.FULL_WEEKEND),
    DayOfWeekRule((SUNDAY,), ExpansionMode.INCLUDE_FRIDAY),
    DayOfWeekRule((MONDAY,), ExpansionMode.FULL_WEEKEND),
    DayOfWeekRule((TUESDAY, WEDNESDAY, THURSDAY), ExpansionMode.NONE),
))

JULY_4_EXPANSION = LONG_WEEKEND_EXPANSION
VETERANS_DAY_EXPANSION = LONG_WEEKEND_EXPANSION
HALLOWEEN_EXPANSION = Always(days=1)

HOLIDAY_EXPANSION_RULES: Dict[str, ExpansionRule] = {
    'independence-day': JULY_4_EXPANSION,
    'veterans-day': VETERANS_DAY_EXPANSION,
    'halloween': HALLOWEEN_EXPANSION,
}


def expansion_rule_for(holiday_id: str) -> Optional[ExpansionRule]:
    return HOLIDAY_EXPANSION_RULES.get(holiday_id)


def _offsets(anchor: date, offsets) -> List[date]:
    return sorted(add_days(anchor, o) for o in offsets)


def full_weekend_dates(anchor: date) -> List[date]:
    wd = anchor.weekday()
    if wd == FRIDAY:
        return _offsets(anchor, (0, 1, 2))
    if wd == SATURDAY:
        return _offsets(anchor, (0, 1))
    if wd == SUNDAY:
        return _offsets(anchor, (-1, 0))
    if wd == MONDAY:
        return _offsets(anchor, (-2, -1, 0))
    return [anchor]


def include_friday_dates(anchor: date) -> List[date]:
    wd = anchor.weekday()
    if wd == SUNDAY:
        return _offsets(anchor, (-2, -1, 0))
    if wd == SATURDAY:
        return _offsets(anchor, (-1, 0))
    return [anchor]


def include_monday_dates(anchor: date) -> List[date]:
    wd = anchor.weekday()
    if wd == SATURDAY:
        return _offsets(anchor, (0, 1, 2))
    if wd == SUNDAY:
        return _offsets(anchor, (0, 1))
    return [anchor]


_MODE_HANDLERS = {
    ExpansionMode.NONE: lambda anchor: [anchor],
    ExpansionMode.FULL_WEEKEND: full_weekend_dates,
    ExpansionMode.INCLUDE_FRIDAY: include_friday_dates,
    ExpansionMode.INCLUDE_MONDAY: include_monday_dates,
}


def expand(anchor: DateLike, rule: ExpansionRule) -> List[date]:
    """
    Alle Tage, die ein Feiertag nach Anwendung der Regel abdeckt.
    Das Ergebnis enthält immer den Ankertag und ist aufsteigend sortiert.
    """
    anchor = to_date(anchor)

    if isinstance(rule, Always):
        return [add_days(anchor, i) for i in range(max(rule.days, 1))]

    if isinstance(rule, WeekendAdjacent):
        return _MODE_HANDLERS[ExpansionMode(rule.mode)](anchor)

    if isinstance(rule, DayOfWeekConditional):
        wd = anchor.weekday()
        match = next((r for r in rule.rules if wd in r.weekdays), None)
        if match is None:
            return [anchor]
        return _MODE_HANDLERS[ExpansionMode(match.mode)](anchor)

    raise TypeError(f"Unknown expansion rule: {rule!r}")
