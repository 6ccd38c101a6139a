from __future__ import annotations

import pytest

from challenge75.recovery import (
    MorningScores,
    calculate_recovery_status,
    db_to_ui,
    scores_to_db,
    ui_to_db,
)


def _scores(**overrides: int) -> MorningScores:
    values = dict(sleep=2, body=2, energy=2, stress=2, motivation=2)
    values.update(overrides)
    return MorningScores(**values)


def test_green_when_rested() -> None:
    result = calculate_recovery_status(_scores())
    assert result.status == "GREEN"
    assert result.total_score == 10
    assert result.emoji == "💪"


@pytest.mark.parametrize("field", ["sleep", "body"])
def test_red_on_sleep_or_body_zero(field: str) -> None:
    assert calculate_recovery_status(_scores(**{field: 0})).status == "RED"


def test_yellow_on_high_stress() -> None:
    assert calculate_recovery_status(_scores(stress=0)).status == "YELLOW"


def test_yellow_on_low_total() -> None:
    result = calculate_recovery_status(_scores(sleep=1, body=1, energy=1, stress=1, motivation=1))
    assert result.total_score == 5
    assert result.status == "YELLOW"


def test_scale_conversion() -> None:
    assert [ui_to_db(v) for v in (0, 1, 2)] == [2, 5, 9]
    assert [db_to_ui(v) for v in (1, 3, 4, 7, 8, 10)] == [0, 0, 1, 1, 2, 2]
    assert db_to_ui(None) == 0


def test_scores_to_db_columns() -> None:
    assert scores_to_db(_scores(stress=0)) == {
        "sleep_score": 9,
        "body_score": 9,
        "energy_score": 9,
        "stress_score": 2,
        "motivation_score": 9,
    }


def test_out_of_range_score_rejected() -> None:
    with pytest.raises(ValueError):
        _scores(energy=3)
