from datetime import date

import pytest

from custodycompass.holidays import (
    ALL_HOLIDAYS, DEFAULT_WINTER_BREAK_SPLIT, HOLIDAY_PRESETS, RELIGIOUS_HOLIDAYS, apply_preset,
    category_total_days, default_holiday_configs, display_date, find_holiday, get_holiday,
    holiday_dates, holidays_by_category, last_weekday, nth_weekday, resolve_assignment,
    resolve_holiday_owner,
)
from custodycompass.models import (
    AssignmentType, BirthdayConfig, HolidayCategory, HolidayState, HolidayUserConfig, Parent,
    PatternId, ScheduleConfig,
)

A, B = Parent.PARENT_A, Parent.PARENT_B
ALTERNATE = AssignmentType.ALTERNATE_ODD_EVEN
SCHEDULE = ScheduleConfig(date(2025, 1, 1), PatternId.ALT_WEEKS, A)


def state_with(*configs, **kwargs):
    return HolidayState(holiday_configs=list(configs), **kwargs)


def test_nth_and_last_weekday():
    assert nth_weekday(2025, 1, 0, 3) == date(2025, 1, 20)    # MLK
    assert nth_weekday(2025, 11, 3, 4) == date(2025, 11, 27)  # Thanksgiving
    assert nth_weekday(2025, 2, 0, 5) is None                 # kein 5. Montag
    assert last_weekday(2025, 5, 0) == date(2025, 5, 26)      # Memorial Day
    assert last_weekday(2025, 10, 4) == date(2025, 10, 31)    # Nevada Day


def test_standard_duration_holidays():
    mlk = holiday_dates(get_holiday('mlk-day'), 2025)
    assert mlk == [date(2025, 1, 20), date(2025, 1, 21), date(2025, 1, 22)]
    thanksgiving = holiday_dates(get_holiday('thanksgiving'), 2025)
    assert thanksgiving[0] == date(2025, 11, 27) and len(thanksgiving) == 5


def test_winter_break_crosses_year():
    dates = holiday_dates(get_holiday('winter-break'), 2025)
    assert dates[0] == date(2025, 12, 23)
    assert dates[-1] == date(2026, 1, 2)
    assert len(dates) == 11


def test_religious_without_year_data_is_empty():
    passover = get_holiday('passover')
    assert holiday_dates(passover, 2025) == [date(2025, 4, 12), date(2025, 4, 13)]
    assert holiday_dates(passover, 2031) == []
    assert display_date(passover, 2031) == 'Date varies'


def test_display_date():
    assert display_date(get_holiday('halloween'), 2025) == 'Oct 31'
    assert display_date(get_holiday('independence-day'), 2025) == 'Jul 4 - Jul 6'


def test_catalog_queries():
    assert len(holidays_by_category(HolidayCategory.MAJOR_BREAK)) == 4
    assert category_total_days(HolidayCategory.MAJOR_BREAK) == 7 + 5 + 14 + 26
    religious = [h for group in RELIGIOUS_HOLIDAYS.values() for h in group]
    assert religious == [h for h in ALL_HOLIDAYS if h.category == HolidayCategory.RELIGIOUS]
    assert religious and not any(h.enabled_by_default for h in religious)
    defaults = {c.holiday_id: c for c in default_holiday_configs()}
    assert defaults['winter-break'].assignment == AssignmentType.SPLIT_PERIOD
    assert not defaults['passover'].enabled


@pytest.mark.parametrize("year,expected", [(2025, A), (2026, B), (2027, A)])
def test_alternate_odd_even(year, expected):
    assert resolve_assignment(ALTERNATE, year, A) == expected


def test_odd_year_parent_override():
    assert resolve_assignment(ALTERNATE, 2025, A, odd_year_parent=B) == B
    assert resolve_assignment(ALTERNATE, 2026, A, odd_year_parent=B) == A


def test_fixed_and_placeholder_assignments():
    assert resolve_assignment(AssignmentType.ALWAYS_PARENT_A, 2026, B) == A
    assert resolve_assignment(AssignmentType.ALWAYS_PARENT_B, 2025, A) == B
    assert resolve_assignment(AssignmentType.SELECTION_PRIORITY, 2025, B) == B
    assert resolve_assignment(AssignmentType.SPLIT_PERIOD, 2025, A) == A


def test_holiday_owner_alternates_by_year():
    state = state_with(HolidayUserConfig('thanksgiving', True, ALTERNATE))
    assert resolve_holiday_owner('2025-11-28', state, SCHEDULE) == A
    assert resolve_holiday_owner('2026-11-27', state, SCHEDULE) == B
    assert resolve_holiday_owner('2025-11-20', state, SCHEDULE) is None


def test_disabled_holiday_is_ignored():
    state = state_with(HolidayUserConfig('thanksgiving', False, ALTERNATE))
    assert find_holiday('2025-11-27', state) is None
    assert find_holiday('2025-11-27', None) is None


def test_winter_break_split_halves_differ():
    state = state_with(HolidayUserConfig('winter-break', True, AssignmentType.SPLIT_PERIOD),
                       winter_break_split=DEFAULT_WINTER_BREAK_SPLIT)
    # 2025 ungerade: erste Hälfte A, ab 26.12. B
    assert resolve_holiday_owner('2025-12-24', state, SCHEDULE) == A
    assert resolve_holiday_owner('2025-12-26', state, SCHEDULE) == B
    assert resolve_holiday_owner('2026-01-02', state, SCHEDULE) == B
    # Ferien 2024/25 gehören zum Jahr 2024
    assert resolve_holiday_owner('2024-12-24', state, SCHEDULE) == B
    assert resolve_holiday_owner('2025-01-01', state, SCHEDULE) == A


def test_split_without_config_uses_starting_parent():
    state = state_with(HolidayUserConfig('winter-break', True, AssignmentType.SPLIT_PERIOD))
    assert resolve_holiday_owner('2025-12-24', state, SCHEDULE) == A
    assert resolve_holiday_owner('2025-12-30', state, SCHEDULE) == A


def test_overlap_resolved_by_priority():
    state = state_with(HolidayUserConfig('purim', True, AssignmentType.ALWAYS_PARENT_B),
                       HolidayUserConfig('spring-break', True, AssignmentType.ALWAYS_PARENT_A))
    # Purim 2027 (22.03.) liegt in den Frühjahrsferien
    match = find_holiday('2027-03-22', state)
    assert match.definition.id == 'spring-break'
    assert resolve_holiday_owner('2027-03-22', state, SCHEDULE) == A


def test_birthday_from_config():
    state = HolidayState(birthdays=[
        BirthdayConfig('child-birthday', 'Emma', 'child', 5, 14, ALTERNATE),
    ])
    match = find_holiday('2025-05-14', state)
    assert match.definition.id == 'child-birthday'
    assert resolve_holiday_owner('2025-05-14', state, SCHEDULE) == A
    assert resolve_holiday_owner('2026-05-14', state, SCHEDULE) == B
    assert find_holiday('2025-05-15', state) is None


def test_birthday_custom_dates():
    cfg = HolidayUserConfig('child-birthday', True, AssignmentType.ALWAYS_PARENT_B,
                            custom_dates=[date(2025, 8, 2)])
    state = state_with(cfg)
    assert resolve_holiday_owner('2025-08-02', state, SCHEDULE) == B
    assert find_holiday('2026-08-02', state) is None


def test_apply_preset():
    configs = default_holiday_configs()
    one_parent = {c.holiday_id: c.assignment for c in apply_preset(configs, 'one-parent-all')}
    assert one_parent['winter-break'] == AssignmentType.ALWAYS_PARENT_A
    assert one_parent['mothers-day'] == AssignmentType.ALWAYS_PARENT_A
    # religiöse Feiertage bleiben unverändert
    assert one_parent['passover'] == ALTERNATE
    assert apply_preset(configs, 'unknown') == configs
    assert set(HOLIDAY_PRESETS) == {'traditional', '50-50-split', 'one-parent-all'}
