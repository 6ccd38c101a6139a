from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from challenge75.errors import UnknownDifficultyError, UnknownRuleError

if TYPE_CHECKING:
    from challenge75.models import DailyLog

LEVELS = ("easy", "medium", "hard")
DEFAULT_LEVEL = "hard"

RULE_NAMES = (
    "diet_completed",
    "workout_outdoor_completed",
    "workout_indoor_completed",
    "reading_completed",
    "photo_uploaded",
)

DEFAULT_WATER_LITERS = 0.0
WATER_STEP_LITERS = 0.25
DEFAULT_WORKOUT_MINUTES = 30
HARD_WORKOUT_MINUTES = 45

LEVEL_DISPLAY_NAMES = {
    "easy": "GNISTAN",
    "medium": "GLÖDEN",
    "hard": "PANNBEN",
}

LEVEL_EMOJIS = {
    "easy": "🔥",
    "medium": "💪",
    "hard": "⚡",
}

LEVEL_DESCRIPTIONS = {
    "easy": "Börja försiktigt. Bygg disciplin utan att överväldigas.",
    "medium": "Utmana dig själv. Balansera träning, kost och återhämtning.",
    "hard": "Hårdkärnan. 75 dagar av totalfokus, ingen nåd.",
}


@dataclass(frozen=True)
class DailyTargets:
    level: str
    workouts: int
    require_outdoor: bool
    workout_duration: int
    water_liters: float
    reading_pages: int
    diet_rules: tuple[str, ...]
    photo_required: bool
    weekly_hard_workouts: int

    @property
    def water_display(self) -> str:
        return f"{self.water_liters:g} liter"

    @property
    def reading_display(self) -> str:
        return f"{self.reading_pages} sidor"


_TARGETS: dict[str, DailyTargets] = {
    "easy": DailyTargets(
        level="easy",
        workouts=1,
        require_outdoor=False,
        workout_duration=DEFAULT_WORKOUT_MINUTES,
        water_liters=2.0,
        reading_pages=5,
        diet_rules=("Inget godis/skräpmat (Vardagar)", "Alkohol tillåten"),
        photo_required=False,
        weekly_hard_workouts=0,
    ),
    "medium": DailyTargets(
        level="medium",
        workouts=1,
        require_outdoor=False,
        workout_duration=DEFAULT_WORKOUT_MINUTES,
        water_liters=3.0,
        reading_pages=10,
        diet_rules=("Inget socker/skräpmat (Alla dagar)", "Ingen alkohol (Vardagar)"),
        photo_required=True,
        weekly_hard_workouts=2,
    ),
    "hard": DailyTargets(
        level="hard",
        workouts=2,
        require_outdoor=True,
        workout_duration=HARD_WORKOUT_MINUTES,
        water_liters=4.0,
        reading_pages=10,
        diet_rules=("Strikt diet", "Inga undantag", "Ingen alkohol", "Inga cheat meals"),
        photo_required=True,
        weekly_hard_workouts=0,
    ),
}


def normalize_level(raw: str | None) -> str:
    if raw is None:
        return DEFAULT_LEVEL
    level = raw.strip().lower()
    if level not in _TARGETS:
        raise UnknownDifficultyError(f"Unknown difficulty level: {raw!r}")
    return level


def targets_for(level: str) -> DailyTargets:
    try:
        return _TARGETS[level]
    except KeyError:
        raise UnknownDifficultyError(f"Unknown difficulty level: {level!r}") from None


def validate_rule(rule: str) -> str:
    if rule not in RULE_NAMES:
        raise UnknownRuleError(f"Unknown rule: {rule!r}. Expected one of {', '.join(RULE_NAMES)}")
    return rule


def level_display_name(level: str) -> str:
    targets_for(level)
    return LEVEL_DISPLAY_NAMES[level]


def weekly_hard_remaining(targets: DailyTargets, weekly_hard_count: int) -> int:
    return max(0, targets.weekly_hard_workouts - max(0, weekly_hard_count))


def missing_requirements(log: DailyLog | None, targets: DailyTargets) -> list[str]:
    """Daily rules not yet satisfied by ``log``.

    The weekly hard-workout quota is not part of this list: it is tracked across
    the week and never blocks a single day from being completed.
    """
    if log is None:
        missing = ["diet_completed", "workout", "water_intake", "reading_completed"]
        if targets.photo_required:
            missing.append("photo_uploaded")
        return missing

    missing: list[str] = []
    if not log.diet_completed:
        missing.append("diet_completed")

    if targets.workouts >= 2:
        if not log.workout_outdoor_completed:
            missing.append("workout_outdoor_completed")
        if not log.workout_indoor_completed:
            missing.append("workout_indoor_completed")
    elif targets.require_outdoor:
        if not log.workout_outdoor_completed:
            missing.append("workout_outdoor_completed")
    elif not (log.workout_outdoor_completed or log.workout_indoor_completed):
        missing.append("workout")

    if log.water_intake < targets.water_liters:
        missing.append("water_intake")
    if not log.reading_completed:
        missing.append("reading_completed")
    if targets.photo_required and not log.photo_uploaded:
        missing.append("photo_uploaded")
    return missing
