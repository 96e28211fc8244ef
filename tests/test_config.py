import json
from datetime import date

import pytest

from custodycompass import config
from custodycompass.config import (
    bundle_from_dict, load_bundle, load_config, save_config, track_breaks_to_list,
)
from custodycompass.models import (
    AssignmentType, InServiceRule, Parent, PatternId, SchoolType,
)

BUNDLE = {
    "schedule": {"startDate": "2025-01-01", "pattern": "2-2-5-5",
                 "startingParent": "parentB", "exchangeTime": "17:00"},
    "holidays": {
        "holidayConfigs": [
            {"holidayId": "winter-break", "enabled": True, "assignment": "split-period"},
            {"holidayId": "thanksgiving", "enabled": True, "assignment": "alternate-odd-even",
             "oddYearParent": "parentB"},
        ],
        "birthdays": [{"id": "child-birthday", "name": "Emma", "type": "child",
                       "month": 5, "day": 14, "defaultAssignment": "always-parent-a"}],
        "winterBreakSplit": {"holidayId": "winter-break", "splitPoint": "December 26 at 12:00 PM",
                             "splitDate": "12-26", "segment1Name": "Christmas",
                             "segment2Name": "New Year's",
                             "segment1Assignment": "alternate-odd-even",
                             "segment2Assignment": "alternate-odd-even"},
    },
    "inServiceDays": ["2025-01-06"],
    "inServiceConfig": {"enabled": True, "attachmentRule": "follow-base-schedule"},
    "trackBreaks": [{"id": "summer", "name": "Summer", "startDate": "2025-06-01",
                     "endDate": "2025-06-14",
                     "vacationClaimed": {"claimedBy": "parentA", "claimDate": "2025-03-01",
                                         "weeks": 2}}],
    "schoolType": "year-round",
}


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return tmp_path


def test_bundle_from_dict():
    bundle = bundle_from_dict(BUNDLE)
    assert bundle.schedule.start_date == date(2025, 1, 1)
    assert bundle.schedule.pattern is PatternId.TWO_TWO_FIVE_FIVE
    assert bundle.schedule.starting_parent is Parent.PARENT_B
    assert bundle.schedule.exchange_time == "17:00"
    configs = {c.holiday_id: c for c in bundle.holiday_state.holiday_configs}
    assert configs["thanksgiving"].odd_year_parent is Parent.PARENT_B
    assert configs["winter-break"].assignment is AssignmentType.SPLIT_PERIOD
    assert bundle.holiday_state.winter_break_split.split_date == "12-26"
    assert bundle.holiday_state.birthdays[0].month == 5
    assert bundle.in_service_days == [date(2025, 1, 6)]
    assert bundle.in_service_config.attachment_rule is InServiceRule.FOLLOW_BASE_SCHEDULE
    assert bundle.track_breaks[0].vacation_claimed.claimed_by is Parent.PARENT_A
    assert bundle.school_type is SchoolType.YEAR_ROUND


def test_minimal_bundle():
    bundle = bundle_from_dict({"schedule": {"startDate": "2025-01-01", "pattern": "alt-weeks"}})
    assert bundle.holiday_state is None
    assert bundle.in_service_days == [] and bundle.track_breaks == []
    assert bundle.schedule.starting_parent is Parent.PARENT_A


def test_unknown_pattern_is_kept(caplog):
    bundle = bundle_from_dict({"schedule": {"startDate": "2025-01-01", "pattern": "4-3"}})
    assert bundle.schedule.pattern == "4-3"
    assert "4-3" in caplog.text


@pytest.mark.parametrize("patch", [
    {"schedule": {"startDate": "01/01/2025", "pattern": "alt-weeks"}},
    {"schedule": {"startDate": "20250101", "pattern": "alt-weeks"}},
    {"schedule": {"startDate": "2025-W01-3", "pattern": "alt-weeks"}},
    {"schedule": {"startDate": "2025-01-01", "pattern": "alt-weeks", "startingParent": "mom"}},
    {"inServiceDays": ["2025-02-30"]},
    {},
])
def test_malformed_bundle_raises(patch):
    data = dict(BUNDLE, **patch) if patch else {"holidays": {}}
    with pytest.raises(ValueError):
        bundle_from_dict(data)


def test_load_bundle_from_file(tmp_path):
    path = tmp_path / "bundle.json"
    path.write_text(json.dumps(BUNDLE), encoding="utf-8")
    assert load_bundle(str(path)) == bundle_from_dict(BUNDLE)


def test_track_breaks_round_trip():
    bundle = bundle_from_dict(BUNDLE)
    assert track_breaks_to_list(bundle.track_breaks) == BUNDLE["trackBreaks"]


def test_config_defaults_and_save(home):
    cfg = load_config()
    assert cfg["week_starts_on"] == "sunday"
    assert cfg["notice_deadline_days"] == 30
    cfg["week_starts_on"] = "monday"
    save_config(cfg)
    assert (home / ".custodycompass" / "custodycompass_config.json").exists()
    assert load_config()["week_starts_on"] == "monday"


def test_broken_config_falls_back(home, caplog):
    path = config._config_path()
    with open(path, "w", encoding="utf-8") as f:
        f.write("{not json")
    assert load_config() == config.DEFAULT_CONFIG
    assert "Could not read config" in caplog.text
