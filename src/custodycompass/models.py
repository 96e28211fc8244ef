from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


class Parent(str, Enum):
    PARENT_A = 'parentA'
    PARENT_B = 'parentB'

    @property
    def other(self) -> 'Parent':
        return Parent.PARENT_B if self is Parent.PARENT_A else Parent.PARENT_A

    @property
    def label(self) -> str:
        return 'Parent A' if self is Parent.PARENT_A else 'Parent B'


class PatternId(str, Enum):
    ALT_WEEKS = 'alt-weeks'
    TWO_TWO_THREE = '2-2-3'
    TWO_TWO_FIVE_FIVE = '2-2-5-5'
    THREE_FOUR_FOUR_THREE = '3-4-4-3'
    EVERY_WEEKEND = 'every-weekend'
    EVERY_OTHER_WEEKEND = 'every-other-weekend'
    SAME_WEEKENDS_MONTHLY = 'same-weekends-monthly'   # 1./3./5. Wochenende
    ALL_TO_ONE = 'all-to-one'                         # volles Sorgerecht
    CUSTOM = 'custom'                                 # noch nicht umgesetzt


class AssignmentType(str, Enum):
    ALTERNATE_ODD_EVEN = 'alternate-odd-even'
    ALWAYS_PARENT_A = 'always-parent-a'
    ALWAYS_PARENT_B = 'always-parent-b'
    SPLIT_PERIOD = 'split-period'
    SELECTION_PRIORITY = 'selection-priority'


class HolidayCategory(str, Enum):
    MAJOR_BREAK = 'major-break'
    WEEKEND = 'weekend'
    BIRTHDAY = 'birthday'
    RELIGIOUS = 'religious'


class InServiceRule(str, Enum):
    ATTACH_TO_ADJACENT = 'attach-to-adjacent'
    FOLLOW_BASE_SCHEDULE = 'follow-base-schedule'
    ALWAYS_PARENT_A = 'always-parent-a'
    ALWAYS_PARENT_B = 'always-parent-b'


class SchoolType(str, Enum):
    TRADITIONAL = 'traditional'
    YEAR_ROUND = 'year-round'


class ClaimRejection(str, Enum):
    ALREADY_CLAIMED = 'already-claimed'
    PAST_DEADLINE = 'past-deadline'


@dataclass
class ScheduleConfig:
    """Grundeinstellung: Startdatum, Rhythmus und welcher Elternteil mit 'A' beginnt."""
    start_date: date
    pattern: Union[PatternId, str]
    starting_parent: Parent = Parent.PARENT_A
    exchange_time: str = '18:00'


@dataclass(frozen=True)
class PatternDefinition:
    id: PatternId
    label: str
    split: str
    description: str
    cycle_length: int
    sequence: Tuple[str, ...]


# --- Holiday date calculations (weekday: 0=Montag … 6=Sonntag) ---

@dataclass(frozen=True)
class FixedDate:
    month: int
    day: int


@dataclass(frozen=True)
class NthWeekday:
    month: int
    weekday: int
    nth: int


@dataclass(frozen=True)
class LastWeekday:
    month: int
    weekday: int


@dataclass(frozen=True)
class DateRange:
    """Spans into the following year when end_month < start_month."""
    start_month: int
    start_day: int
    end_month: int
    end_day: int


@dataclass(frozen=True)
class CustomDates:
    dates: Tuple[date, ...] = ()


@dataclass(frozen=True)
class YearTable:
    """Anchor date per year, for holidays that follow a lunar calendar."""
    dates: Dict[int, date] = field(default_factory=dict)


DateCalculation = Union[FixedDate, NthWeekday, LastWeekday, DateRange, CustomDates, YearTable]


@dataclass(frozen=True)
class HolidayDefinition:
    id: str
    name: str
    category: HolidayCategory
    default_assignment: AssignmentType
    date_calculation: DateCalculation
    duration_days: int = 1
    priority: int = 0
    description: str = ''
    enabled_by_default: bool = True


@dataclass
class SplitPeriodConfig:
    """Teilt einen Ferienblock (z. B. Winterferien) an `split_date` (MM-DD) in zwei Hälften."""
    holiday_id: str
    split_point: str
    split_date: str
    segment1_name: str
    segment2_name: str
    segment1_assignment: AssignmentType
    segment2_assignment: AssignmentType


@dataclass
class SelectionPriorityConfig:
    holiday_id: str
    weeks_per_parent: int
    blocks_per_parent: int
    selection_deadline: str
    first_pick_odd_years: Parent
    max_consecutive_weeks: Optional[int] = None


@dataclass
class HolidayUserConfig:
    holiday_id: str
    enabled: bool
    assignment: AssignmentType
    odd_year_parent: Optional[Parent] = None
    split_config: Optional[SplitPeriodConfig] = None
    selection_config: Optional[SelectionPriorityConfig] = None
    custom_dates: List[date] = field(default_factory=list)


@dataclass
class BirthdayConfig:
    id: str
    name: str
    kind: str                       # 'child' | 'parent-a' | 'parent-b'
    month: int
    day: int
    default_assignment: AssignmentType


@dataclass
class HolidayState:
    holiday_configs: List[HolidayUserConfig] = field(default_factory=list)
    birthdays: List[BirthdayConfig] = field(default_factory=list)
    winter_break_split: Optional[SplitPeriodConfig] = None
    summer_vacation_config: Optional[SelectionPriorityConfig] = None
    selected_preset: Optional[str] = None


@dataclass
class InServiceDayConfig:
    enabled: bool = True
    attachment_rule: InServiceRule = InServiceRule.ATTACH_TO_ADJACENT


@dataclass(frozen=True)
class VacationClaim:
    claimed_by: Parent
    claim_date: date
    weeks: int


@dataclass(frozen=True)
class TrackBreak:
    """Ferienblock einer Ganzjahresschule, optional von einem Elternteil als Urlaub beansprucht."""
    id: str
    name: str
    start_date: date
    end_date: date
    vacation_claimed: Optional[VacationClaim] = None

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass
class ResolvedDay:
    """Ergebnis für ein Datum: Elternteil plus Herkunft der Entscheidung."""
    date: date
    owner: Parent
    holiday_name: Optional[str] = None
    holiday_id: Optional[str] = None
    is_holiday_override: bool = False
    is_in_service_day: bool = False
    is_in_service_attached: bool = False
    is_track_break: bool = False
    track_break_name: Optional[str] = None
    is_track_break_vacation_claimed: bool = False
    is_current_month: bool = True
    is_today: bool = False

    @property
    def day_of_month(self) -> int:
        return self.date.day

    def as_dict(self) -> dict:
        return {
            'date': self.date.isoformat(),
            'dayOfMonth': self.day_of_month,
            'owner': self.owner.value,
            'holidayName': self.holiday_name,
            'isHolidayOverride': self.is_holiday_override,
            'isInServiceDay': self.is_in_service_day,
            'isInServiceAttached': self.is_in_service_attached,
            'isTrackBreak': self.is_track_break,
            'trackBreakName': self.track_break_name,
            'isTrackBreakVacationClaimed': self.is_track_break_vacation_claimed,
            'isCurrentMonth': self.is_current_month,
            'isToday': self.is_today,
        }


@dataclass
class ClaimValidation:
    valid: bool
    reason: Optional[str] = None
    rejection: Optional[ClaimRejection] = None
    days_remaining: Optional[int] = None


@dataclass
class ParentStats:
    days: int
    percentage: float


@dataclass
class MonthlyBreakdown:
    month: str
    parent_a_days: int = 0
    parent_b_days: int = 0


@dataclass
class YearlyStats:
    year: int
    parent_a: ParentStats
    parent_b: ParentStats
    monthly_breakdown: List[MonthlyBreakdown]

    @property
    def total_days(self) -> int:
        return self.parent_a.days + self.parent_b.days

    def for_parent(self, parent: Parent) -> ParentStats:
        return self.parent_a if parent is Parent.PARENT_A else self.parent_b

    def as_dict(self) -> dict:
        return {
            'year': self.year,
            'parentA': {'days': self.parent_a.days, 'percentage': self.parent_a.percentage},
            'parentB': {'days': self.parent_b.days, 'percentage': self.parent_b.percentage},
            'monthlyBreakdown': [
                {'month': m.month, 'parentADays': m.parent_a_days, 'parentBDays': m.parent_b_days}
                for m in self.monthly_breakdown
            ],
        }


@dataclass
class HolidayImpact:
    parent_a_days: int = 0
    parent_b_days: int = 0

    def add(self, owner: Parent):
        if owner is Parent.PARENT_A:
            self.parent_a_days += 1
        else:
            self.parent_b_days += 1


@dataclass
class HolidayImpactBreakdown:
    major_breaks: HolidayImpact = field(default_factory=HolidayImpact)
    weekend_holidays: HolidayImpact = field(default_factory=HolidayImpact)
    birthdays: HolidayImpact = field(default_factory=HolidayImpact)
    religious: HolidayImpact = field(default_factory=HolidayImpact)
    total: HolidayImpact = field(default_factory=HolidayImpact)
