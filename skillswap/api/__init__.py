# skillswap/api/__init__.py
# This file makes the api directory a Python package.

from . import admin
from . import announcement
from . import auth
from . import availability
from . import report
from . import review
from . import search
from . import skill
from . import swap_request
from . import users

__all__ = [
    "auth",
    "search",
    "users",
    "skill",
    "availability",
    "swap_request",
    "review",
    "report",
    "announcement",
    "admin",
]
