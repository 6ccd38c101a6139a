from __future__ import annotations

from dataclasses import dataclass

SCORE_KEYS = ("sleep", "body", "energy", "stress", "motivation")

_UI_TO_DB = {0: 2, 1: 5, 2: 9}

RECOVERY_MESSAGES = {
    "RED": "Kroppen signalerar fara. Gå, spring inte.",
    "YELLOW": "Pannbenet är redo, men systemet är slitet. Var smart.",
    "GREEN": "Du är en maskin. Kör hårt.",
}

RECOVERY_EMOJIS = {
    "GREEN": "💪",
    "YELLOW": "⚠️",
    "RED": "🛑",
}


@dataclass(frozen=True)
class MorningScores:
    """Check-in answers on the 0 (bad) .. 2 (good) scale."""

    sleep: int
    body: int
    energy: int
    stress: int
    motivation: int

    def __post_init__(self) -> None:
        for key in SCORE_KEYS:
            value = getattr(self, key)
            if value not in _UI_TO_DB:
                raise ValueError(f"{key} score must be 0, 1 or 2, got {value!r}")

    @property
    def total(self) -> int:
        return self.sleep + self.body + self.energy + self.stress + self.motivation


@dataclass(frozen=True)
class RecoveryResult:
    status: str
    message: str
    emoji: str
    total_score: int


def ui_to_db(score: int) -> int:
    return _UI_TO_DB[score]


def db_to_ui(score: int | None) -> int:
    if score is None or score <= 3:
        return 0
    if score <= 7:
        return 1
    return 2


def scores_to_db(scores: MorningScores) -> dict[str, int]:
    return {f"{key}_score": ui_to_db(getattr(scores, key)) for key in SCORE_KEYS}


def calculate_recovery_status(scores: MorningScores) -> RecoveryResult:
    total = scores.total
    if scores.body == 0 or scores.sleep == 0:
        status = "RED"
    elif scores.stress == 0 or total < 6:
        status = "YELLOW"
    else:
        status = "GREEN"
    return RecoveryResult(
        status=status,
        message=RECOVERY_MESSAGES[status],
        emoji=RECOVERY_EMOJIS[status],
        total_score=total,
    )
