from .base import BaseDatabase
from .profiles import ProfileMixin
from .logs import LogMixin
from .system import SystemMixin

__all__ = [
    "BaseDatabase",
    "ProfileMixin",
    "LogMixin",
    "SystemMixin",
]
