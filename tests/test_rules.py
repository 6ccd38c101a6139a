from __future__ import annotations

from datetime import date

import pytest

from challenge75.errors import UnknownDifficultyError, UnknownRuleError
from challenge75.rules import (
    RULE_NAMES,
    level_display_name,
    missing_requirements,
    normalize_level,
    targets_for,
    validate_rule,
    weekly_hard_remaining,
)

from factories import make_log


def _log(**overrides: object):
    return make_log(date(2026, 3, 2), **overrides)


def test_hard_targets() -> None:
    targets = targets_for("hard")
    assert targets.workouts == 2
    assert targets.require_outdoor is True
    assert targets.workout_duration == 45
    assert targets.water_liters == 4.0
    assert targets.reading_pages == 10
    assert targets.photo_required is True
    assert targets.weekly_hard_workouts == 0


def test_medium_targets() -> None:
    targets = targets_for("medium")
    assert targets.workouts == 1
    assert targets.workout_duration == 30
    assert targets.water_liters == 3.0
    assert targets.photo_required is True
    assert targets.weekly_hard_workouts == 2


def test_easy_photo_optional() -> None:
    targets = targets_for("easy")
    assert targets.photo_required is False
    assert targets.water_liters == 2.0
    assert targets.reading_pages == 5
    assert targets.water_display == "2 liter"


def test_targets_are_stable_lookups() -> None:
    assert targets_for("medium") == targets_for("medium")


def test_unknown_level_fails_fast() -> None:
    with pytest.raises(UnknownDifficultyError):
        targets_for("insane")
    with pytest.raises(UnknownDifficultyError):
        normalize_level("insane")


def test_normalize_level_defaults_to_hard() -> None:
    assert normalize_level(None) == "hard"
    assert normalize_level(" Easy ") == "easy"


def test_level_display_names() -> None:
    assert level_display_name("easy") == "GNISTAN"
    assert level_display_name("hard") == "PANNBEN"


@pytest.mark.parametrize("rule", RULE_NAMES)
def test_validate_known_rules(rule: str) -> None:
    assert validate_rule(rule) == rule


def test_validate_unknown_rule() -> None:
    with pytest.raises(UnknownRuleError):
        validate_rule("is_completed")


def test_missing_without_log_lists_everything() -> None:
    assert missing_requirements(None, targets_for("easy")) == [
        "diet_completed",
        "workout",
        "water_intake",
        "reading_completed",
    ]
    assert "photo_uploaded" in missing_requirements(None, targets_for("hard"))


def test_hard_requires_both_workouts() -> None:
    log = _log(
        diet_completed=True,
        workout_outdoor_completed=True,
        reading_completed=True,
        photo_uploaded=True,
        water_intake=4.0,
    )
    assert missing_requirements(log, targets_for("hard")) == ["workout_indoor_completed"]


def test_easy_accepts_any_single_workout() -> None:
    log = _log(diet_completed=True, workout_indoor_completed=True, reading_completed=True, water_intake=2.0)
    assert missing_requirements(log, targets_for("easy")) == []


def test_water_below_target_is_missing() -> None:
    log = _log(
        diet_completed=True,
        workout_outdoor_completed=True,
        reading_completed=True,
        photo_uploaded=True,
        water_intake=2.75,
    )
    assert missing_requirements(log, targets_for("medium")) == ["water_intake"]


def test_weekly_hard_remaining() -> None:
    assert weekly_hard_remaining(targets_for("medium"), 0) == 2
    assert weekly_hard_remaining(targets_for("medium"), 3) == 0
    assert weekly_hard_remaining(targets_for("hard"), 0) == 0
