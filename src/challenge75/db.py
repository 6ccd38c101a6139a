from __future__ import annotations

from challenge75.db_repo import BaseDatabase, LogMixin, ProfileMixin, SystemMixin
from challenge75.models import DailyLog, Profile

__all__ = ["Database", "DailyLog", "Profile"]


class Database(ProfileMixin, LogMixin, SystemMixin, BaseDatabase):
    pass
