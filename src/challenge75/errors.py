from __future__ import annotations


class ChallengeError(Exception):
    """Base class for refused state transitions."""


class DayAlreadyCompletedError(ChallengeError):
    def __init__(self, log_date: str) -> None:
        super().__init__(f"Day {log_date} is already completed")
        self.log_date = log_date


class BonusAlreadyRegisteredError(ChallengeError):
    def __init__(self, log_date: str) -> None:
        super().__init__(f"Bonus workout already registered for {log_date}")
        self.log_date = log_date


class ResetNotConfirmedError(ChallengeError):
    pass


class UnknownRuleError(ValueError):
    pass


class UnknownDifficultyError(ValueError):
    pass
