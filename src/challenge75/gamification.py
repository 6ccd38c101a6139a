from __future__ import annotations

from dataclasses import dataclass

from challenge75.rules import targets_for

DAILY_BASE_XP = 100
BONUS_WORKOUT_XP = 20
LEVEL_BONUS_XP = {
    "easy": 0,
    "medium": 25,
    "hard": 50,
}

DEFAULT_XP_TUNING = {
    "daily_base": DAILY_BASE_XP,
    "bonus_workout": BONUS_WORKOUT_XP,
    "level_bonus_easy": LEVEL_BONUS_XP["easy"],
    "level_bonus_medium": LEVEL_BONUS_XP["medium"],
    "level_bonus_hard": LEVEL_BONUS_XP["hard"],
}


@dataclass(frozen=True)
class Rank:
    threshold: int
    name: str
    emoji: str


RANKS: tuple[Rank, ...] = (
    Rank(threshold=0, name="Rekryt", emoji="🪖"),
    Rank(threshold=500, name="Menig", emoji="⭐"),
    Rank(threshold=1500, name="Korpral", emoji="⭐⭐"),
    Rank(threshold=3000, name="Sergeant", emoji="🎖️"),
    Rank(threshold=5000, name="Fänrik", emoji="🎖️🎖️"),
    Rank(threshold=7500, name="General", emoji="⭐⭐⭐"),
)


@dataclass(frozen=True)
class RankProgress:
    current: Rank
    next: Rank | None
    progress_ratio: float
    xp_to_next: int


def _effective_tuning(tuning: dict[str, int] | None = None) -> dict[str, int]:
    if not tuning:
        return dict(DEFAULT_XP_TUNING)
    merged = dict(DEFAULT_XP_TUNING)
    merged.update(tuning)
    return merged


def daily_xp(level: str, weekly_hard_count: int = 0, tuning: dict[str, int] | None = None) -> int:
    """XP for one completed day: the base award plus the tier bonus.

    ``weekly_hard_count`` never lowers the award; the tier bonus is always paid.
    """
    targets_for(level)
    cfg = _effective_tuning(tuning)
    return int(cfg["daily_base"]) + int(cfg[f"level_bonus_{level}"])


def bonus_workout_xp(tuning: dict[str, int] | None = None) -> int:
    return int(_effective_tuning(tuning)["bonus_workout"])


def rank_for(total_xp: int) -> Rank:
    xp = max(0, total_xp)
    current = RANKS[0]
    for rank in RANKS:
        if xp >= rank.threshold:
            current = rank
        else:
            break
    return current


def next_rank(total_xp: int) -> Rank | None:
    xp = max(0, total_xp)
    for rank in RANKS:
        if rank.threshold > xp:
            return rank
    return None


def rank_progress(total_xp: int) -> RankProgress:
    xp = max(0, total_xp)
    current = rank_for(xp)
    upcoming = next_rank(xp)
    if upcoming is None:
        return RankProgress(current=current, next=None, progress_ratio=1.0, xp_to_next=0)
    span = max(upcoming.threshold - current.threshold, 1)
    ratio = min((xp - current.threshold) / span, 1.0)
    return RankProgress(
        current=current,
        next=upcoming,
        progress_ratio=ratio,
        xp_to_next=upcoming.threshold - xp,
    )
