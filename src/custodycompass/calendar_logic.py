from dataclasses import dataclass, replace
from datetime import date
from typing import Collection, Iterable, List, Optional, Tuple

from .dates import DateLike, add_days, days_between, is_weekend, to_date
from .holidays import HolidayMatch, find_holiday, holiday_owner
from .models import (
    ClaimRejection, ClaimValidation, HolidayState, InServiceDayConfig, InServiceRule, Parent,
    ResolvedDay, ScheduleConfig, SchoolType, TrackBreak, VacationClaim,
)
from .patterns import resolve_base_owner

DEFAULT_NOTICE_DEADLINE_DAYS = 30
GRID_CELLS = 42


class VacationClaimError(ValueError):
    """Urlaubsanspruch auf einen Track-Break ist nicht zulässig."""

    def __init__(self, validation: ClaimValidation):
        super().__init__(validation.reason)
        self.validation = validation


@dataclass
class TrackBreakInfo:
    in_break: bool = False
    name: Optional[str] = None
    claim: Optional[VacationClaim] = None

    @property
    def claimed(self) -> bool:
        return self.claim is not None


def _date_set(days: Optional[Iterable[DateLike]]) -> Collection[date]:
    # fertige date-Mengen (Monats- und Jahresschleifen) nicht neu aufbauen
    if isinstance(days, (set, frozenset)):
        return days
    return {to_date(d) for d in days} if days else set()


def resolve_standard_owner(day: date, schedule: ScheduleConfig,
                           holiday_state: Optional[HolidayState] = None) -> Tuple[Parent, Optional[HolidayMatch]]:
    """Feiertagsregel vor Grundmuster. Liefert (Elternteil, Feiertagstreffer oder None)."""
    match = find_holiday(day, holiday_state)
    if match is not None:
        return holiday_owner(match, day, holiday_state, schedule), match
    return resolve_base_owner(day, schedule), None


def resolve_in_service_day(day: DateLike, in_service_days: Optional[Iterable[DateLike]],
                           config: Optional[InServiceDayConfig], schedule: ScheduleConfig,
                           holiday_state: Optional[HolidayState] = None) -> Tuple[Parent, bool]:
    """
    Unterrichtsfreie Tage (in-service days) neu zuordnen.
    Rückgabe: (Elternteil, angehängt?)

      attach-to-adjacent   : erst Vortag, dann Folgetag prüfen; ist er Feiertag oder
                             Wochenende, übernimmt der Tag dessen Elternteil
      follow-base-schedule : normaler Plan
      always-parent-a/b    : fest
    """
    day = to_date(day)
    flagged = day in _date_set(in_service_days)

    if not flagged or config is None or not config.enabled:
        return resolve_standard_owner(day, schedule, holiday_state)[0], False

    rule = InServiceRule(config.attachment_rule)
    if rule is InServiceRule.ALWAYS_PARENT_A:
        return Parent.PARENT_A, True
    if rule is InServiceRule.ALWAYS_PARENT_B:
        return Parent.PARENT_B, True
    if rule is InServiceRule.ATTACH_TO_ADJACENT:
        for neighbor in (add_days(day, -1), add_days(day, 1)):
            owner, match = resolve_standard_owner(neighbor, schedule, holiday_state)
            if match is not None or is_weekend(neighbor):
                return owner, True

    return resolve_standard_owner(day, schedule, holiday_state)[0], False


def find_track_break(day: DateLike, track_breaks: Optional[Iterable[TrackBreak]]) -> Optional[TrackBreak]:
    day = to_date(day)
    return next((tb for tb in track_breaks or () if tb.contains(day)), None)


def track_break_info(day: DateLike, track_breaks: Optional[Iterable[TrackBreak]],
                     school_type: Optional[SchoolType]) -> TrackBreakInfo:
    """Track-Breaks zählen nur bei Ganzjahresschulen."""
    if school_type is None or SchoolType(school_type) is not SchoolType.YEAR_ROUND:
        return TrackBreakInfo()
    tb = find_track_break(day, track_breaks)
    if tb is None:
        return TrackBreakInfo()
    return TrackBreakInfo(True, tb.name, tb.vacation_claimed)


def can_claim_vacation(track_break: TrackBreak, parent: Parent, today: DateLike,
                       notice_deadline_days: int = DEFAULT_NOTICE_DEADLINE_DAYS) -> ClaimValidation:
    """
    Prüft, ob `parent` den Track-Break als Urlaub beanspruchen darf.
    Reine Prüfung: der Anspruch selbst wird vom Aufrufer gespeichert.
    """
    if track_break.vacation_claimed is not None:
        holder = Parent(track_break.vacation_claimed.claimed_by)
        return ClaimValidation(False, f"Already claimed by {holder.label}",
                               ClaimRejection.ALREADY_CLAIMED)

    remaining = days_between(track_break.start_date, today)
    if remaining < notice_deadline_days:
        return ClaimValidation(
            False,
            f"Must claim at least {notice_deadline_days} days before break "
            f"({remaining} days remaining)",
            ClaimRejection.PAST_DEADLINE,
            remaining,
        )
    return ClaimValidation(True, days_remaining=remaining)


def claim_vacation(track_break: TrackBreak, parent: Parent, today: DateLike, weeks: int,
                   notice_deadline_days: int = DEFAULT_NOTICE_DEADLINE_DAYS) -> TrackBreak:
    """Neuer TrackBreak mit Anspruch; der übergebene bleibt unverändert."""
    validation = can_claim_vacation(track_break, parent, today, notice_deadline_days)
    if not validation.valid:
        raise VacationClaimError(validation)
    claim = VacationClaim(claimed_by=Parent(parent), claim_date=to_date(today), weeks=weeks)
    return replace(track_break, vacation_claimed=claim)


def release_vacation(track_break: TrackBreak) -> TrackBreak:
    return replace(track_break, vacation_claimed=None)


def resolve_full(day: DateLike, schedule: ScheduleConfig,
                 holiday_state: Optional[HolidayState] = None,
                 in_service_days: Optional[Iterable[DateLike]] = None,
                 in_service_config: Optional[InServiceDayConfig] = None,
                 track_breaks: Optional[Iterable[TrackBreak]] = None,
                 school_type: Optional[SchoolType] = None) -> ResolvedDay:
    """
    Elternteil für ein Datum inkl. Herkunft. Reihenfolge (höchste zuerst):
      1. beanspruchter Track-Break
      2. unterrichtsfreier Tag (nur markierte Tage)
      3. Feiertag
      4. Grundmuster
    """
    day = to_date(day)
    in_service = _date_set(in_service_days)
    tb = track_break_info(day, track_breaks, school_type)
    is_in_service_day = day in in_service

    owner, match = resolve_standard_owner(day, schedule, holiday_state)
    attached = False
    if is_in_service_day:
        owner, attached = resolve_in_service_day(day, in_service, in_service_config,
                                                 schedule, holiday_state)
    if tb.claimed:
        owner = Parent(tb.claim.claimed_by)

    return ResolvedDay(
        date=day,
        owner=owner,
        holiday_name=match.definition.name if match else None,
        holiday_id=match.definition.id if match else None,
        is_holiday_override=match is not None and not attached and not tb.claimed,
        is_in_service_day=is_in_service_day,
        is_in_service_attached=attached,
        is_track_break=tb.in_break,
        track_break_name=tb.name,
        is_track_break_vacation_claimed=tb.claimed,
    )


def grid_start(year: int, month: int, week_starts_on: str = 'sunday') -> date:
    """Erster Tag der 6x7-Monatsansicht."""
    if week_starts_on not in ('sunday', 'monday'):
        raise ValueError(f"week_starts_on must be 'sunday' or 'monday', got {week_starts_on!r}")
    first = date(year, month, 1)
    if week_starts_on == 'monday':
        offset = first.weekday()
    else:
        offset = (first.weekday() + 1) % 7
    return add_days(first, -offset)


def generate_month_grid(year: int, month: int, schedule: ScheduleConfig,
                        holiday_state: Optional[HolidayState] = None,
                        in_service_days: Optional[Iterable[DateLike]] = None,
                        in_service_config: Optional[InServiceDayConfig] = None,
                        track_breaks: Optional[Iterable[TrackBreak]] = None,
                        school_type: Optional[SchoolType] = None,
                        week_starts_on: str = 'sunday',
                        today: Optional[date] = None) -> List[ResolvedDay]:
    """
    42 Tage (6 volle Wochen) für die Monatsansicht; month ist 1-basiert.
    Tage außerhalb des Monats werden ebenfalls aufgelöst (is_current_month=False).
    """
    start = grid_start(year, month, week_starts_on)
    today = today or date.today()
    in_service = _date_set(in_service_days)
    breaks = list(track_breaks or ())

    days: List[ResolvedDay] = []
    for i in range(GRID_CELLS):
        current = add_days(start, i)
        resolved = resolve_full(current, schedule, holiday_state, in_service,
                                in_service_config, breaks, school_type)
        resolved.is_current_month = current.month == month
        resolved.is_today = current == today
        days.append(resolved)
    return days
