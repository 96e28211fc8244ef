import json
import logging
import os
from datetime import date
from typing import Any, Dict, List, Optional, Union

from .dates import parse_iso
from .engine import CustodyBundle
from .models import (
    AssignmentType, BirthdayConfig, HolidayState, HolidayUserConfig, InServiceDayConfig,
    InServiceRule, Parent, PatternId, ScheduleConfig, SchoolType, SelectionPriorityConfig,
    SplitPeriodConfig, TrackBreak, VacationClaim,
)

DEFAULT_CONFIG = {
    'week_starts_on': 'sunday',
    'notice_deadline_days': 30,
    'parent_names': {'parentA': 'Parent A', 'parentB': 'Parent B'},
}


def _config_path():
    base = os.path.join(os.path.expanduser('~'), '.custodycompass')
    os.makedirs(base, exist_ok=True)
    return os.path.join(base, 'custodycompass_config.json')


def load_config():
    """App-Einstellungen; fehlende oder defekte Datei -> Standardwerte."""
    path = _config_path()
    if not os.path.exists(path):
        return dict(DEFAULT_CONFIG)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            stored = json.load(f)
    except (OSError, ValueError) as e:
        logging.error(f"Could not read config {path}: {e}")
        return dict(DEFAULT_CONFIG)
    return {**DEFAULT_CONFIG, **stored}


def save_config(cfg: dict):
    path = _config_path()
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)


# --- Eingabe-Bundle (ISO-Daten YYYY-MM-DD) ---

def parse_date(value: Any, field_name: str = 'date') -> date:
    if not isinstance(value, str):
        raise ValueError(f"{field_name}: expected ISO date string, got {value!r}")
    try:
        return parse_iso(value)
    except ValueError:
        raise ValueError(f"{field_name}: invalid ISO date {value!r}") from None


def parse_parent(value: Any) -> Parent:
    try:
        return Parent(value)
    except ValueError:
        raise ValueError(f"Unknown parent id {value!r}") from None


def parse_pattern(value: str) -> Union[PatternId, str]:
    try:
        return PatternId(value)
    except ValueError:
        logging.warning(f"Unknown pattern {value!r}, schedule falls back to starting parent")
        return value


def _optional_parent(value: Any) -> Optional[Parent]:
    return parse_parent(value) if value is not None else None


def _split(data: Optional[dict]) -> Optional[SplitPeriodConfig]:
    if not data:
        return None
    return SplitPeriodConfig(
        holiday_id=data['holidayId'],
        split_point=data.get('splitPoint', ''),
        split_date=data['splitDate'],
        segment1_name=data.get('segment1Name', ''),
        segment2_name=data.get('segment2Name', ''),
        segment1_assignment=AssignmentType(data['segment1Assignment']),
        segment2_assignment=AssignmentType(data['segment2Assignment']),
    )


def _selection(data: Optional[dict]) -> Optional[SelectionPriorityConfig]:
    if not data:
        return None
    return SelectionPriorityConfig(
        holiday_id=data['holidayId'],
        weeks_per_parent=data.get('weeksPerParent', 2),
        blocks_per_parent=data.get('blocksPerParent', 2),
        selection_deadline=data.get('selectionDeadline', ''),
        first_pick_odd_years=parse_parent(data.get('firstPickOddYears', 'parentA')),
        max_consecutive_weeks=data.get('maxConsecutiveWeeks'),
    )


def schedule_from_dict(data: Dict[str, Any]) -> ScheduleConfig:
    return ScheduleConfig(
        start_date=parse_date(data['startDate'], 'startDate'),
        pattern=parse_pattern(data['pattern']),
        starting_parent=parse_parent(data.get('startingParent', 'parentA')),
        exchange_time=data.get('exchangeTime', '18:00'),
    )


def holiday_state_from_dict(data: Dict[str, Any]) -> HolidayState:
    configs = [
        HolidayUserConfig(
            holiday_id=c['holidayId'],
            enabled=c.get('enabled', True),
            assignment=AssignmentType(c['assignment']),
            odd_year_parent=_optional_parent(c.get('oddYearParent')),
            split_config=_split(c.get('splitConfig')),
            selection_config=_selection(c.get('selectionConfig')),
            custom_dates=[parse_date(d, 'customDates') for d in c.get('customDates', [])],
        )
        for c in data.get('holidayConfigs', [])
    ]
    birthdays = [
        BirthdayConfig(b['id'], b.get('name', b['id']), b.get('type', 'child'),
                       int(b['month']), int(b['day']),
                       AssignmentType(b.get('defaultAssignment', 'alternate-odd-even')))
        for b in data.get('birthdays', [])
    ]
    return HolidayState(
        holiday_configs=configs,
        birthdays=birthdays,
        winter_break_split=_split(data.get('winterBreakSplit')),
        summer_vacation_config=_selection(data.get('summerVacationConfig')),
        selected_preset=data.get('selectedPreset'),
    )


def track_break_from_dict(data: Dict[str, Any]) -> TrackBreak:
    claim = data.get('vacationClaimed')
    return TrackBreak(
        id=data['id'],
        name=data.get('name', data['id']),
        start_date=parse_date(data['startDate'], 'startDate'),
        end_date=parse_date(data['endDate'], 'endDate'),
        vacation_claimed=VacationClaim(
            claimed_by=parse_parent(claim['claimedBy']),
            claim_date=parse_date(claim['claimDate'], 'claimDate'),
            weeks=int(claim.get('weeks', 0)),
        ) if claim else None,
    )


def bundle_from_dict(data: Dict[str, Any]) -> CustodyBundle:
    """Baut das Eingabe-Bundle aus der JSON-Struktur (camelCase-Schlüssel)."""
    if 'schedule' not in data:
        raise ValueError("Configuration bundle needs a 'schedule' section")

    in_service_cfg = data.get('inServiceConfig')
    school_type = data.get('schoolType')
    return CustodyBundle(
        schedule=schedule_from_dict(data['schedule']),
        holiday_state=holiday_state_from_dict(data['holidays']) if data.get('holidays') else None,
        in_service_days=[parse_date(d, 'inServiceDays') for d in data.get('inServiceDays', [])],
        in_service_config=InServiceDayConfig(
            enabled=in_service_cfg.get('enabled', True),
            attachment_rule=InServiceRule(in_service_cfg.get('attachmentRule', 'attach-to-adjacent')),
        ) if in_service_cfg else None,
        track_breaks=[track_break_from_dict(tb) for tb in data.get('trackBreaks', [])],
        school_type=SchoolType(school_type) if school_type else None,
    )


def load_bundle(path: str) -> CustodyBundle:
    with open(path, 'r', encoding='utf-8') as f:
        return bundle_from_dict(json.load(f))


def track_breaks_to_list(track_breaks: List[TrackBreak]) -> List[dict]:
    """Gegenstück zu track_break_from_dict, z. B. nach claim_vacation."""
    out = []
    for tb in track_breaks:
        item = {'id': tb.id, 'name': tb.name,
                'startDate': tb.start_date.isoformat(), 'endDate': tb.end_date.isoformat()}
        if tb.vacation_claimed:
            item['vacationClaimed'] = {
                'claimedBy': tb.vacation_claimed.claimed_by.value,
                'claimDate': tb.vacation_claimed.claim_date.isoformat(),
                'weeks': tb.vacation_claimed.weeks,
            }
        out.append(item)
    return out
