"""
Blocking HTTP session for the geocoding step.

Geocoding is a single idempotent GET made before any travel-time query, so
transparent retries with backoff (429 and 5xx) cost nothing but latency and
save a whole run from one flaky response. The Distance Matrix oracle cannot
share this session: it runs inside the engine's event loop, must be
cancellable with its wave, and must never retry (a retried chunk would
break the wave's rate limit). It uses ``httpx.AsyncClient`` instead.

Usage::

    from isochrone_mapper.services.http import session

    resp = session.get(GEOCODING_API, params={...})
    resp.raise_for_status()
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from isochrone_mapper import __version__

USER_AGENT = f"isochrone-mapper/{__version__}"

#: Retry policy for geocoding lookups.
DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,
    status_forcelist=[429, 500, 502, 503, 504],
    allowed_methods=["GET"],
    raise_on_status=False,  # the caller's raise_for_status() reports the final status
)

DEFAULT_TIMEOUT = 15  # seconds


class TimeoutHTTPAdapter(HTTPAdapter):
    """``HTTPAdapter`` that fills in a timeout when the caller gives none."""

    def __init__(self, *args: Any, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(  # type: ignore[override]
        self, request: requests.PreparedRequest, **kwargs: Any
    ) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = USER_AGENT,
) -> requests.Session:
    """
    Build a retrying ``requests.Session`` for geocoding.

    Args:
        retry: Retry policy (defaults to ``DEFAULT_RETRY``).
        timeout: Seconds applied to requests that don't set their own.
        user_agent: ``User-Agent`` header value.
    """
    s = requests.Session()
    adapter = TimeoutHTTPAdapter(max_retries=retry or DEFAULT_RETRY, timeout=timeout)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = user_agent
    return s


#: Shared session used by ``GoogleGeocoder`` unless one is injected.
session: requests.Session = create_session()
