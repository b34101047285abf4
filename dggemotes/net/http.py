"""
Blocking HTTP GET helper used by the metadata fetcher and the image writer.

Every request carries a timeout so a hung server can only stall one worker
for a bounded time. Any status other than 200 is raised as HttpStatusError.
"""

from __future__ import annotations

from typing import BinaryIO, Callable
from urllib.error import HTTPError
from urllib.request import Request, urlopen


DEFAULT_TIMEOUT_S = 30.0

DEFAULT_USER_AGENT = "dgg-emotes/0.1"


class HttpStatusError(RuntimeError):
    """
    Raised when an endpoint answers with a status other than 200.

    Attributes:
        url: The requested URL.
        status_code: HTTP status code returned by the server.
    """

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"Request to url {url} returned with status code {status_code}")
        self.url = url
        self.status_code = status_code


# Type for open function: (url, *, timeout_s) -> readable response (context manager)
OpenFunc = Callable[..., BinaryIO]


def open_url(
    url: str,
    *,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    user_agent: str = DEFAULT_USER_AGENT,
) -> BinaryIO:
    """
    Issue a GET request and return the open response.

    The caller owns the response and should use it as a context manager.

    Raises:
        HttpStatusError: If the server answers with a non-200 status.
        urllib.error.URLError: On connection failures.
        TimeoutError: If the request exceeds timeout_s.
    """
    req = Request(url, headers={"User-Agent": user_agent, "Accept": "*/*"})
    try:
        resp = urlopen(req, timeout=timeout_s)
    except HTTPError as exc:
        raise HttpStatusError(url, int(exc.code)) from exc

    status = int(getattr(resp, "status", 0) or resp.getcode() or 0)
    if status != 200:
        resp.close()
        raise HttpStatusError(url, status)
    return resp
