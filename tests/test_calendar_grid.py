# tests/test_calendar_grid.py

from datetime import date

import pytest
from freezegun import freeze_time

from custodycompass.calendar_logic import GRID_CELLS, generate_month_grid, grid_start
from custodycompass.models import Parent, PatternId, ScheduleConfig

SCHEDULE = ScheduleConfig(date(2025, 1, 1), PatternId.ALT_WEEKS, Parent.PARENT_A)


def test_grid_has_42_days():
    days = generate_month_grid(2025, 1, SCHEDULE)
    assert len(days) == GRID_CELLS == 42
    # lückenlos aufeinanderfolgend
    assert all((b.date - a.date).days == 1 for a, b in zip(days, days[1:]))


def test_sunday_and_monday_start():
    # 1.1.2025 ist ein Mittwoch
    assert grid_start(2025, 1, 'sunday') == date(2024, 12, 29)
    assert grid_start(2025, 1, 'monday') == date(2024, 12, 30)
    # 1.2.2026 ist ein Sonntag und steht ganz links
    assert grid_start(2026, 2, 'sunday') == date(2026, 2, 1)


def test_bad_week_start():
    with pytest.raises(ValueError):
        generate_month_grid(2025, 1, SCHEDULE, week_starts_on='tuesday')


def test_current_month_flags():
    days = generate_month_grid(2025, 1, SCHEDULE, week_starts_on='monday')
    current = [d for d in days if d.is_current_month]
    assert len(current) == 31
    assert all(d.date.month == 1 for d in current)
    outside = [d for d in days if not d.is_current_month]
    assert outside[0].date == date(2024, 12, 30)
    # Tage außerhalb des Monats werden trotzdem aufgelöst
    assert outside[0].owner == Parent.PARENT_B


@freeze_time("2025-01-15")
def test_today_flag_uses_current_date():
    days = generate_month_grid(2025, 1, SCHEDULE)
    today = [d for d in days if d.is_today]
    assert [d.date for d in today] == [date(2025, 1, 15)]


def test_explicit_today():
    days = generate_month_grid(2025, 3, SCHEDULE, today=date(2025, 3, 3))
    assert sum(d.is_today for d in days) == 1
    assert not any(d.is_today for d in generate_month_grid(2025, 3, SCHEDULE, today=date(2030, 1, 1)))


def test_as_dict_output():
    day = generate_month_grid(2025, 1, SCHEDULE, today=date(2025, 1, 1))[3]
    data = day.as_dict()
    assert data['date'] == '2025-01-01'
    assert data['dayOfMonth'] == 1
    assert data['owner'] == 'parentA'
    assert data['isToday'] is True and data['isCurrentMonth'] is True
