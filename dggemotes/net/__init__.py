"""
Network utilities: blocking GET with timeout and status checking.
"""

from .http import (
    DEFAULT_TIMEOUT_S,
    DEFAULT_USER_AGENT,
    HttpStatusError,
    OpenFunc,
    open_url,
)

__all__ = [
    "DEFAULT_TIMEOUT_S",
    "DEFAULT_USER_AGENT",
    "HttpStatusError",
    "OpenFunc",
    "open_url",
]
