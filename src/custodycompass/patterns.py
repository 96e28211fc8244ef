import logging
import math
from datetime import date
from typing import Dict, List, Optional, Union

from .dates import DateLike, days_between, to_date
from .models import Parent, PatternDefinition, PatternId, ScheduleConfig


PATTERNS: List[PatternDefinition] = [
    # 50/50
    PatternDefinition(PatternId.ALT_WEEKS, 'Every Other Week', '50/50',
                      'Simplest 50/50. Full week with each parent, alternating.',
                      14, tuple('AAAAAAABBBBBBB')),
    PatternDefinition(PatternId.TWO_TWO_THREE, '2-2-3 Rotation', '50/50',
                      'Parent A: Mon-Tue, Parent B: Wed-Thu, Alternating Fri-Sun.',
                      14, tuple('AABBAAABBAABBB')),
    PatternDefinition(PatternId.TWO_TWO_FIVE_FIVE, '2-2-5-5 Rotation', '50/50',
                      'Most popular 50/50. Two days each, then five days each.',
                      14, tuple('AABBAAAAABBBBB')),
    PatternDefinition(PatternId.THREE_FOUR_FOUR_THREE, '3-4-4-3 Rotation', '50/50',
                      'Three days, then four days, swapping the next week.',
                      14, tuple('AAABBBBAAAABBB')),
    # 60/40
    PatternDefinition(PatternId.EVERY_WEEKEND, 'Every Weekend', '60/40',
                      'Primary parent has weekdays. Other parent has every weekend.',
                      7, tuple('AAAAABB')),
    # 80/20
    PatternDefinition(PatternId.EVERY_OTHER_WEEKEND, 'Every Other Weekend', '80/20',
                      'Primary custody with alternating weekend visitation.',
                      14, tuple('AAAAABBAAAAAAA')),
    PatternDefinition(PatternId.SAME_WEEKENDS_MONTHLY, 'Same Weekends Each Month', '80/20',
                      '1st, 3rd, and 5th weekends to non-custodial parent.',
                      7, ()),
    # 100/0
    PatternDefinition(PatternId.ALL_TO_ONE, 'All to One Parent', '100/0',
                      'Full custody to one parent. No scheduled visitation.',
                      1, ('A',)),
    PatternDefinition(PatternId.CUSTOM, 'Custom Repeating Rate', 'Custom',
                      'Define your own repeating pattern.',
                      0, ()),
]

_PATTERNS_BY_ID: Dict[str, PatternDefinition] = {p.id.value: p for p in PATTERNS}

SPLIT_GROUPS = [
    ('50/50', '50/50 Schedules'),
    ('60/40', '60/40 Schedules'),
    ('80/20', '80/20 Schedules'),
    ('100/0', 'Full Custody'),
    ('Custom', 'Custom'),
]

SPLIT_PERCENTAGES = {
    '50/50': (50, 50),
    '60/40': (60, 40),
    '80/20': (80, 20),
    '100/0': (100, 0),
    'Custom': (50, 50),
}


def get_pattern(pattern_id: Union[PatternId, str]) -> Optional[PatternDefinition]:
    key = pattern_id.value if isinstance(pattern_id, PatternId) else pattern_id
    return _PATTERNS_BY_ID.get(key)


def pattern_groups() -> List[dict]:
    """Muster nach Aufteilung gruppiert (für Auswahl-Listen)."""
    return [
        {'split': split, 'label': label,
         'patterns': [p for p in PATTERNS if p.split == split]}
        for split, label in SPLIT_GROUPS
    ]


def split_percentages(split: Optional[str]) -> tuple:
    """(Anteil A, Anteil B) in Prozent; unbekannte Aufteilungen gelten als 50/50."""
    return SPLIT_PERCENTAGES.get(split, SPLIT_PERCENTAGES['50/50'])


def same_weekends_owner(day: date, starting_parent: Parent) -> Parent:
    """
    1., 3. und 5. Wochenende eines Monats gehen an den anderen Elternteil,
    Wochentage sowie 2. und 4. Wochenende an den startenden Elternteil.
    Tage 1-7 bilden Wochenende 1, 8-14 Wochenende 2 usw.
    """
    if day.weekday() < 5:
        return starting_parent
    weekend_number = math.ceil(day.day / 7)
    if weekend_number in (1, 3, 5):
        return starting_parent.other
    return starting_parent


def cycle_owner(day: date, start_date: date, sequence, cycle_length: int,
                starting_parent: Parent) -> Parent:
    offset = days_between(day, start_date)
    # Index bleibt auch vor start_date in 0..n-1
    index = ((offset % cycle_length) + cycle_length) % cycle_length
    return starting_parent if sequence[index] == 'A' else starting_parent.other


def resolve_base_owner(day: DateLike, config: ScheduleConfig) -> Parent:
    day = to_date(day)
    pattern = get_pattern(config.pattern)

    if pattern is None:
        logging.debug(f"Unknown pattern {config.pattern!r}, using starting parent")
        return config.starting_parent
    if pattern.id is PatternId.SAME_WEEKENDS_MONTHLY:
        return same_weekends_owner(day, config.starting_parent)
    if pattern.id is PatternId.ALL_TO_ONE:
        return config.starting_parent
    if pattern.id is PatternId.CUSTOM or pattern.cycle_length == 0:
        # TODO: custom repeating rates need a user-defined sequence in ScheduleConfig
        return config.starting_parent

    return cycle_owner(day, config.start_date, pattern.sequence,
                       pattern.cycle_length, config.starting_parent)
