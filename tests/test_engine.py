from datetime import date

from custodycompass.engine import CustodyBundle, CustodyEngine
from custodycompass.holidays import DEFAULT_WINTER_BREAK_SPLIT
from custodycompass.models import (
    AssignmentType, HolidayState, HolidayUserConfig, InServiceDayConfig, InServiceRule, Parent,
    PatternId, ScheduleConfig, SchoolType, TrackBreak, VacationClaim,
)
from custodycompass.statistics import calculate_yearly_stats

A, B = Parent.PARENT_A, Parent.PARENT_B


def make_bundle():
    return CustodyBundle(
        schedule=ScheduleConfig(date(2025, 1, 1), PatternId.TWO_TWO_FIVE_FIVE, A),
        holiday_state=HolidayState(
            [HolidayUserConfig('winter-break', True, AssignmentType.SPLIT_PERIOD),
             HolidayUserConfig('thanksgiving', True, AssignmentType.ALTERNATE_ODD_EVEN)],
            winter_break_split=DEFAULT_WINTER_BREAK_SPLIT),
        in_service_days=[date(2025, 1, 6)],
        in_service_config=InServiceDayConfig(True, InServiceRule.ALWAYS_PARENT_B),
        track_breaks=[TrackBreak('summer', 'Summer', date(2025, 6, 1), date(2025, 6, 14),
                                 VacationClaim(B, date(2025, 3, 1), 2))],
        school_type=SchoolType.YEAR_ROUND,
    )


def test_engine_matches_functions():
    bundle = make_bundle()
    engine = CustodyEngine(bundle)
    expected = calculate_yearly_stats(2025, bundle.schedule, bundle.holiday_state,
                                      bundle.in_service_days, bundle.in_service_config,
                                      bundle.track_breaks, bundle.school_type)
    assert engine.yearly_stats(2025) == expected


def test_engine_layers_apply():
    engine = CustodyEngine(make_bundle())
    assert engine.owner_for_date('2025-01-06') == B
    assert engine.owner_for_date('2025-06-03') == B
    assert engine.resolve('2025-11-27').holiday_id == 'thanksgiving'
    assert engine.resolve('2025-11-27').owner == A
    assert engine.owner_for_date('2025-12-29') == B


def test_engine_copies_configuration():
    bundle = make_bundle()
    engine = CustodyEngine(bundle)
    before = engine.owner_for_date('2025-01-06')
    bundle.in_service_days.clear()
    bundle.schedule.starting_parent = B
    assert CustodyEngine(bundle).owner_for_date('2025-01-01') == B
    assert engine.owner_for_date('2025-01-06') == before
    assert engine.owner_for_date('2025-01-01') == A


def test_resolve_is_repeatable():
    engine = CustodyEngine(make_bundle())
    first = engine.resolve('2025-03-03')
    first.owner = B if first.owner == A else A
    assert engine.resolve('2025-03-03') != first


def test_month_grid_and_impact():
    engine = CustodyEngine(make_bundle())
    grid = engine.month_grid(2025, 12, week_starts_on='monday', today=date(2025, 12, 25))
    assert len(grid) == 42
    assert [d.date for d in grid if d.is_today] == [date(2025, 12, 25)]
    impact = engine.holiday_impact(2025)
    assert impact.major_breaks.parent_a_days > 0
    assert impact.major_breaks.parent_b_days > 0


def test_engine_without_holidays():
    bundle = CustodyBundle(ScheduleConfig(date(2025, 1, 1), PatternId.ALL_TO_ONE, A))
    engine = CustodyEngine(bundle)
    assert engine.yearly_stats(2025).parent_a.days == 365
    assert engine.holiday_impact(2025).total.parent_a_days == 0
