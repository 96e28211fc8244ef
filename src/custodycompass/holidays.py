import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, Iterable, List, Optional

from dateutil.relativedelta import relativedelta, weekday

from .dates import DateLike, add_days, month_name, to_date
from .expansion import expand, expansion_rule_for
from .models import (
    AssignmentType, BirthdayConfig, CustomDates, DateCalculation, DateRange, FixedDate,
    HolidayCategory, HolidayDefinition, HolidayState, HolidayUserConfig, LastWeekday,
    NthWeekday, Parent, ScheduleConfig, SelectionPriorityConfig, SplitPeriodConfig, YearTable,
)

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

ALTERNATE = AssignmentType.ALTERNATE_ODD_EVEN
ALWAYS_A = AssignmentType.ALWAYS_PARENT_A
ALWAYS_B = AssignmentType.ALWAYS_PARENT_B
SPLIT = AssignmentType.SPLIT_PERIOD
SELECTION = AssignmentType.SELECTION_PRIORITY


# --- 3-Tage-Wochenenden ---
WEEKEND_HOLIDAYS: List[HolidayDefinition] = [
    HolidayDefinition('mlk-day', 'Martin Luther King Jr. Day', HolidayCategory.WEEKEND,
                      ALTERNATE, NthWeekday(1, MONDAY, 3), 3, 20, 'Third Monday of January'),
    HolidayDefinition('presidents-day', "Presidents' Day", HolidayCategory.WEEKEND,
                      ALTERNATE, NthWeekday(2, MONDAY, 3), 3, 20, 'Third Monday of February'),
    HolidayDefinition('mothers-day', "Mother's Day", HolidayCategory.WEEKEND,
                      ALWAYS_B, NthWeekday(5, SUNDAY, 2), 3, 25, 'Second Sunday of May'),
    HolidayDefinition('memorial-day', 'Memorial Day', HolidayCategory.WEEKEND,
                      ALTERNATE, LastWeekday(5, MONDAY), 3, 20, 'Last Monday of May'),
    HolidayDefinition('fathers-day', "Father's Day", HolidayCategory.WEEKEND,
                      ALWAYS_A, NthWeekday(6, SUNDAY, 3), 3, 25, 'Third Sunday of June'),
    HolidayDefinition('independence-day', 'Independence Day', HolidayCategory.WEEKEND,
                      ALTERNATE, FixedDate(7, 4), 3, 20, 'July 4th weekend'),
    HolidayDefinition('labor-day', 'Labor Day', HolidayCategory.WEEKEND,
                      ALTERNATE, NthWeekday(9, MONDAY, 1), 3, 20, 'First Monday of September'),
    HolidayDefinition('nevada-day', 'Nevada Day', HolidayCategory.WEEKEND,
                      ALTERNATE, LastWeekday(10, FRIDAY), 3, 15, 'Last Friday of October'),
    HolidayDefinition('halloween', 'Halloween', HolidayCategory.WEEKEND,
                      ALTERNATE, FixedDate(10, 31), 1, 15, 'October 31st evening'),
    HolidayDefinition('veterans-day', 'Veterans Day', HolidayCategory.WEEKEND,
                      ALTERNATE, FixedDate(11, 11), 3, 20, 'November 11th weekend'),
]

# --- Große Ferienblöcke ---
MAJOR_BREAKS: List[HolidayDefinition] = [
    HolidayDefinition('spring-break', 'Spring Break', HolidayCategory.MAJOR_BREAK,
                      ALTERNATE, DateRange(3, 17, 3, 23), 7, 30, 'Typically one week in mid-March'),
    HolidayDefinition('thanksgiving', 'Thanksgiving', HolidayCategory.MAJOR_BREAK,
                      ALTERNATE, NthWeekday(11, THURSDAY, 4), 5, 35, 'Wednesday 6pm through Sunday 6pm'),
    HolidayDefinition('winter-break', 'Winter Break', HolidayCategory.MAJOR_BREAK,
                      SPLIT, DateRange(12, 23, 1, 2), 14, 40, 'December 23 through January 2'),
    HolidayDefinition('summer-vacation', 'Summer Vacation', HolidayCategory.MAJOR_BREAK,
                      SELECTION, DateRange(6, 1, 8, 15), 26, 45, 'Each parent selects vacation weeks'),
]

# Geburtstage: Datum kommt aus der Benutzerkonfiguration
BIRTHDAY_DEFINITIONS: List[HolidayDefinition] = [
    HolidayDefinition('child-birthday', "Children's Birthday", HolidayCategory.BIRTHDAY,
                      ALTERNATE, CustomDates(), 1, 50, "Child's birthday celebration"),
    HolidayDefinition('mother-birthday', "Mother's Birthday", HolidayCategory.BIRTHDAY,
                      ALWAYS_B, CustomDates(), 1, 50, "Mother's birthday"),
    HolidayDefinition('father-birthday', "Father's Birthday", HolidayCategory.BIRTHDAY,
                      ALWAYS_A, CustomDates(), 1, 50, "Father's birthday"),
]


def _table(*isodates: str) -> YearTable:
    return YearTable({int(d[:4]): date.fromisoformat(d) for d in isodates})


def _religious(holiday_id, name, duration, description, dates: YearTable) -> HolidayDefinition:
    return HolidayDefinition(holiday_id, name, HolidayCategory.RELIGIOUS, ALTERNATE, dates,
                             duration, 10, description, enabled_by_default=False)


# Mondkalender-Feiertage: Ankerdatum je Jahr, 2024-2030
JEWISH_HOLIDAYS: List[HolidayDefinition] = [
    _religious('passover', 'Passover (First Seder)', 2, 'First two nights of Passover',
               _table('2024-04-22', '2025-04-12', '2026-04-01', '2027-04-21',
                      '2028-04-10', '2029-03-30', '2030-04-17')),
    _religious('rosh-hashanah', 'Rosh Hashanah', 2, 'Jewish New Year',
               _table('2024-10-02', '2025-09-22', '2026-09-11', '2027-10-01',
                      '2028-09-20', '2029-09-09', '2030-09-27')),
    _religious('yom-kippur', 'Yom Kippur', 1, 'Day of Atonement',
               _table('2024-10-11', '2025-10-01', '2026-09-20', '2027-10-10',
                      '2028-09-29', '2029-09-18', '2030-10-06')),
    _religious('sukkot', 'Sukkot (First Days)', 2, 'Feast of Tabernacles',
               _table('2024-10-16', '2025-10-06', '2026-09-25', '2027-10-15',
                      '2028-10-04', '2029-09-23', '2030-10-11')),
    _religious('hanukkah', 'Hanukkah (First Night)', 1, 'Festival of Lights (first night)',
               _table('2024-12-25', '2025-12-14', '2026-12-04', '2027-12-24',
                      '2028-12-12', '2029-12-01', '2030-12-20')),
    _religious('purim', 'Purim', 1, 'Festival of Lots',
               _table('2024-03-23', '2025-03-13', '2026-03-02', '2027-03-22',
                      '2028-03-11', '2029-02-28', '2030-03-18')),
]

CHRISTIAN_HOLIDAYS: List[HolidayDefinition] = [
    _religious('good-friday', 'Good Friday', 1, 'Friday before Easter Sunday',
               _table('2024-03-29', '2025-04-18', '2026-04-03', '2027-03-26',
                      '2028-04-14', '2029-03-30', '2030-04-19')),
    _religious('easter-sunday', 'Easter Sunday', 1, 'Celebration of the resurrection',
               _table('2024-03-31', '2025-04-20', '2026-04-05', '2027-03-28',
                      '2028-04-16', '2029-04-01', '2030-04-21')),
    _religious('ash-wednesday', 'Ash Wednesday', 1, 'Beginning of Lent',
               _table('2024-02-14', '2025-03-05', '2026-02-18', '2027-02-10',
                      '2028-03-01', '2029-02-14', '2030-03-06')),
]

ISLAMIC_HOLIDAYS: List[HolidayDefinition] = [
    _religious('eid-al-fitr', 'Eid al-Fitr', 3, 'Festival of Breaking the Fast (end of Ramadan)',
               _table('2024-04-09', '2025-03-30', '2026-03-19', '2027-03-08',
                      '2028-02-25', '2029-02-13', '2030-02-03')),
    _religious('eid-al-adha', 'Eid al-Adha', 4, 'Festival of Sacrifice',
               _table('2024-06-16', '2025-06-06', '2026-05-26', '2027-05-16',
                      '2028-05-04', '2029-04-23', '2030-04-12')),
]

RELIGIOUS_HOLIDAYS: Dict[str, List[HolidayDefinition]] = {
    'jewish': JEWISH_HOLIDAYS,
    'christian': CHRISTIAN_HOLIDAYS,
    'islamic': ISLAMIC_HOLIDAYS,
    'other': [],
}

ALL_HOLIDAYS: List[HolidayDefinition] = (
    MAJOR_BREAKS + WEEKEND_HOLIDAYS + BIRTHDAY_DEFINITIONS
    + JEWISH_HOLIDAYS + CHRISTIAN_HOLIDAYS + ISLAMIC_HOLIDAYS
)

_HOLIDAYS_BY_ID: Dict[str, HolidayDefinition] = {h.id: h for h in ALL_HOLIDAYS}
_CATALOG_ORDER: Dict[str, int] = {h.id: i for i, h in enumerate(ALL_HOLIDAYS)}

DEFAULT_WINTER_BREAK_SPLIT = SplitPeriodConfig(
    holiday_id='winter-break',
    split_point='December 26 at 12:00 PM',
    split_date='12-26',
    segment1_name='Christmas',
    segment2_name="New Year's",
    segment1_assignment=ALTERNATE,
    segment2_assignment=ALTERNATE,
)

DEFAULT_SUMMER_VACATION_CONFIG = SelectionPriorityConfig(
    holiday_id='summer-vacation',
    weeks_per_parent=2,
    blocks_per_parent=2,
    selection_deadline='April 1',
    first_pick_odd_years=Parent.PARENT_A,
    max_consecutive_weeks=2,
)

HOLIDAY_PRESETS: Dict[str, Dict[str, AssignmentType]] = {
    'traditional': {
        'mlk-day': ALTERNATE, 'presidents-day': ALTERNATE, 'mothers-day': ALWAYS_B,
        'memorial-day': ALTERNATE, 'fathers-day': ALWAYS_A, 'independence-day': ALTERNATE,
        'labor-day': ALTERNATE, 'nevada-day': ALTERNATE, 'halloween': ALTERNATE,
        'veterans-day': ALTERNATE, 'spring-break': ALTERNATE, 'thanksgiving': ALTERNATE,
        'winter-break': SPLIT, 'summer-vacation': SELECTION, 'child-birthday': ALTERNATE,
        'mother-birthday': ALWAYS_B, 'father-birthday': ALWAYS_A,
    },
    '50-50-split': {
        **{h.id: ALTERNATE for h in WEEKEND_HOLIDAYS + BIRTHDAY_DEFINITIONS},
        'spring-break': ALTERNATE, 'thanksgiving': ALTERNATE,
        'winter-break': SPLIT, 'summer-vacation': SELECTION,
    },
    'one-parent-all': {
        h.id: ALWAYS_A for h in MAJOR_BREAKS + WEEKEND_HOLIDAYS + BIRTHDAY_DEFINITIONS
    },
}


@dataclass
class HolidayMatch:
    """Feiertag, der ein bestimmtes Datum abdeckt."""
    definition: HolidayDefinition
    config: HolidayUserConfig
    year: int
    start: date


def get_holiday(holiday_id: str) -> Optional[HolidayDefinition]:
    return _HOLIDAYS_BY_ID.get(holiday_id)


def holidays_by_category(category: HolidayCategory) -> List[HolidayDefinition]:
    return [h for h in ALL_HOLIDAYS if h.category == category]


def category_total_days(category: HolidayCategory) -> int:
    return sum(h.duration_days for h in holidays_by_category(category))


def default_holiday_configs() -> List[HolidayUserConfig]:
    return [HolidayUserConfig(h.id, h.enabled_by_default, h.default_assignment)
            for h in ALL_HOLIDAYS]


def default_birthday_configs() -> List[BirthdayConfig]:
    return [
        BirthdayConfig('mother-birthday', 'Mother', 'parent-b', 1, 1, ALWAYS_B),
        BirthdayConfig('father-birthday', 'Father', 'parent-a', 1, 1, ALWAYS_A),
    ]


def apply_preset(configs: Iterable[HolidayUserConfig], preset: str) -> List[HolidayUserConfig]:
    """Übernimmt die Zuordnungen eines Presets; unbekannte Presets ändern nichts."""
    assignments = HOLIDAY_PRESETS.get(preset)
    if assignments is None:
        logging.warning(f"Unknown holiday preset {preset!r}")
        return list(configs)
    return [replace(c, assignment=assignments[c.holiday_id]) if c.holiday_id in assignments else c
            for c in configs]


def nth_weekday(year: int, month: int, wd: int, nth: int) -> Optional[date]:
    """z. B. 3. Montag im Januar; None, falls es den n-ten Wochentag nicht gibt."""
    result = date(year, month, 1) + relativedelta(weekday=weekday(wd, nth))
    return result if result.month == month else None


def last_weekday(year: int, month: int, wd: int) -> date:
    return date(year, month, 1) + relativedelta(day=31, weekday=weekday(wd, -1))


def anchor_date(calc: DateCalculation, year: int) -> Optional[date]:
    """Ankerdatum vor der Erweiterung; None für Zeiträume und freie Daten."""
    if isinstance(calc, FixedDate):
        try:
            return date(year, calc.month, calc.day)
        except ValueError:
            return None
    if isinstance(calc, NthWeekday):
        return nth_weekday(year, calc.month, calc.weekday, calc.nth)
    if isinstance(calc, LastWeekday):
        return last_weekday(year, calc.month, calc.weekday)
    if isinstance(calc, YearTable):
        return calc.dates.get(year)
    return None


def holiday_dates(holiday: HolidayDefinition, year: int,
                  custom_dates: Optional[Iterable[date]] = None) -> List[date]:
    """
    Alle Tage eines Feiertags im gegebenen Jahr.
    Fehlen Daten für das Jahr (Mondkalender, Geburtstage ohne Datum), ist die Liste leer.
    """
    calc = holiday.date_calculation
    rule = expansion_rule_for(holiday.id)
    anchor = anchor_date(calc, year)

    if rule is not None and anchor is not None:
        return expand(anchor, rule)

    if anchor is not None:
        return [add_days(anchor, i) for i in range(holiday.duration_days)]

    if isinstance(calc, DateRange):
        end_year = year + 1 if calc.end_month < calc.start_month else year
        start = date(year, calc.start_month, calc.start_day)
        end = date(end_year, calc.end_month, calc.end_day)
        return [add_days(start, i) for i in range((end - start).days + 1)]

    if isinstance(calc, CustomDates):
        pool = list(calc.dates) + list(custom_dates or [])
        return sorted({d for d in pool if d.year == year})

    return []


def display_date(holiday: HolidayDefinition, year: int) -> str:
    dates = holiday_dates(holiday, year)
    if not dates:
        return 'Date varies'

    def fmt(d: date) -> str:
        return f"{month_name(d.month)} {d.day}"

    if len(dates) == 1:
        return fmt(dates[0])
    return f"{fmt(dates[0])} - {fmt(dates[-1])}"


def resolve_assignment(assignment: AssignmentType, year: int, starting_parent: Parent,
                       odd_year_parent: Optional[Parent] = None) -> Parent:
    """
    Konkreter Elternteil für eine Zuordnungsregel in einem Jahr.
    split-period und selection-priority liefern hier den startenden Elternteil;
    die Aufteilung selbst übernimmt resolve_split_owner.
    """
    assignment = AssignmentType(assignment)
    if assignment is AssignmentType.ALWAYS_PARENT_A:
        return Parent.PARENT_A
    if assignment is AssignmentType.ALWAYS_PARENT_B:
        return Parent.PARENT_B
    if assignment is AssignmentType.ALTERNATE_ODD_EVEN:
        odd_owner = odd_year_parent or starting_parent
        return odd_owner if year % 2 == 1 else odd_owner.other
    return starting_parent


def split_boundary(split_config: SplitPeriodConfig, holiday_start: date) -> date:
    month, day = (int(part) for part in split_config.split_date.split('-'))
    boundary = date(holiday_start.year, month, day)
    if boundary < holiday_start:
        boundary = date(holiday_start.year + 1, month, day)
    return boundary


def resolve_split_owner(split_config: SplitPeriodConfig, day: date, holiday_start: date,
                        year: int, starting_parent: Parent,
                        odd_year_parent: Optional[Parent] = None) -> Parent:
    """Erste Hälfte bis vor dem Teilungstag, zweite Hälfte ab dem Teilungstag."""
    first = resolve_assignment(split_config.segment1_assignment, year, starting_parent, odd_year_parent)
    if day < split_boundary(split_config, holiday_start):
        return first
    if (split_config.segment1_assignment == ALTERNATE
            and split_config.segment2_assignment == ALTERNATE):
        # beide Hälften wechseln jährlich, aber nie an denselben Elternteil
        return first.other
    return resolve_assignment(split_config.segment2_assignment, year, starting_parent, odd_year_parent)


def _birthday_definition(bday: BirthdayConfig) -> HolidayDefinition:
    known = get_holiday(bday.id)
    name = known.name if known else f"{bday.name}'s Birthday"
    return HolidayDefinition(bday.id, name, HolidayCategory.BIRTHDAY, bday.default_assignment,
                             FixedDate(bday.month, bday.day), 1, 50)


def _active_holidays(state: HolidayState):
    """(Definition, Konfiguration) aller aktiven Feiertage."""
    configs = {c.holiday_id: c for c in state.holiday_configs}
    birthdays = {b.id: b for b in state.birthdays}
    seen = set()

    for cfg in state.holiday_configs:
        if cfg.holiday_id in seen:
            continue
        seen.add(cfg.holiday_id)
        if not cfg.enabled:
            continue
        if cfg.holiday_id in birthdays and not cfg.custom_dates:
            yield _birthday_definition(birthdays[cfg.holiday_id]), cfg
            continue
        definition = get_holiday(cfg.holiday_id)
        if definition is None:
            logging.debug(f"No holiday definition for {cfg.holiday_id!r}")
            continue
        yield definition, cfg

    for bday in state.birthdays:
        if bday.id in configs:
            continue
        yield _birthday_definition(bday), HolidayUserConfig(bday.id, True, bday.default_assignment)


def find_holiday(day: DateLike, state: Optional[HolidayState]) -> Optional[HolidayMatch]:
    """
    Aktiver Feiertag, der `day` abdeckt. Bei Überschneidungen gewinnt die höhere
    Priorität, bei Gleichstand die Reihenfolge im Katalog.
    """
    if state is None:
        return None
    day = to_date(day)
    best = None
    best_key = None

    for definition, cfg in _active_holidays(state):
        # Zeiträume über den Jahreswechsel gehören zum Vorjahr
        for year in (day.year, day.year - 1, day.year + 1):
            dates = holiday_dates(definition, year, cfg.custom_dates)
            if day not in dates:
                continue
            key = (definition.priority, -_CATALOG_ORDER.get(definition.id, len(_CATALOG_ORDER)))
            if best_key is None or key > best_key:
                best = HolidayMatch(definition, cfg, year, dates[0])
                best_key = key
            break
    return best


def split_config_for(match: HolidayMatch, state: HolidayState) -> Optional[SplitPeriodConfig]:
    if match.config.split_config is not None:
        return match.config.split_config
    split = state.winter_break_split
    if split is not None and split.holiday_id == match.definition.id:
        return split
    return None


def holiday_owner(match: HolidayMatch, day: date, state: HolidayState,
                  schedule: ScheduleConfig) -> Parent:
    cfg = match.config
    if cfg.assignment == SPLIT:
        split = split_config_for(match, state)
        if split is not None:
            return resolve_split_owner(split, day, match.start, match.year,
                                       schedule.starting_parent, cfg.odd_year_parent)
    return resolve_assignment(cfg.assignment, match.year, schedule.starting_parent,
                              cfg.odd_year_parent)


def resolve_holiday_owner(day: DateLike, state: Optional[HolidayState],
                          schedule: ScheduleConfig) -> Optional[Parent]:
    """Elternteil laut Feiertagsregel oder None, wenn kein aktiver Feiertag greift."""
    day = to_date(day)
    match = find_holiday(day, state)
    if match is None:
        return None
    return holiday_owner(match, day, state, schedule)
