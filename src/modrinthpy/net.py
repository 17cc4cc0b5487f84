"""
net.py - HTTP transport for the Modrinth REST API.

Provides the Transport class used by the search cursor, the tag cache and the
high-level client. It owns a requests.Session carrying the authentication
headers, builds endpoint URLs from MODRINTHAPIURLS, parses JSON responses and
records the rate-limit counters reported by the server.

Two layers are exposed:
  - request(): raises a mapped ModrinthError subclass on any failure.
  - get() / post(): fail-soft wrappers that log and return None instead.

Usage example:
    from modrinthpy.net import Transport
    t = Transport()
    hits = t.get(MODRINTHAPIURLS.SEARCH, params={"query": "sodium"})
    print(t.rate_limit.remaining)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import *

import requests

from .config import ModrinthConfig
from .exceptions import (
    InvalidArgumentError,
    InvalidResponseError,
    ModrinthError,
    NetworkError,
    map_http_status,
)
from .routes import MODRINTHAPIURLS
from .utils import session_factory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimit:
    """
    Snapshot of the rate-limit counters from the most recent response.

    Attributes
    ----------
    limit : int
        Maximum number of requests that can be made in a minute.
    remaining : int
        Requests remaining in the current window.
    reset : int
        Seconds until the window resets.
    """
    limit: int = 0
    remaining: int = 0
    reset: int = 0

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimit":
        return cls(
            limit=_header_int(headers, "X-Ratelimit-Limit"),
            remaining=_header_int(headers, "X-Ratelimit-Remaining"),
            reset=_header_int(headers, "X-Ratelimit-Reset"),
        )


def _header_int(headers: Mapping[str, str], name: str) -> int:
    try:
        return int(headers.get(name) or 0)
    except (TypeError, ValueError):
        return 0


def _encode_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Drop None values and JSON-encode list/tuple values (the API expects e.g. ids=["a","b"])."""
    if not params:
        return None
    encoded: Dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            encoded[key] = json.dumps(list(value))
        elif isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        else:
            encoded[key] = value
    return encoded


class Transport:
    """
    Authenticated HTTP transport bound to one API base URL.

    Parameters
    ----------
    config : Optional[ModrinthConfig]
        Token, user agent, base URL and timeout. Defaults to ModrinthConfig.from_env().
    session : Optional[requests.Session]
        Optional session (useful for injecting mocked sessions in tests). When
        given, the authentication headers are added to it.
    """

    def __init__(self, config: Optional[ModrinthConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or ModrinthConfig.from_env()
        self.base_url = self.config.base_url.rstrip("/")
        self.timeout = float(self.config.timeout)
        if session is None:
            self.session = session_factory(self.config.token, self.config.user_agent)
        else:
            self.session = session
            self.session.headers.update({"Accept": "application/json", "User-Agent": self.config.user_agent})
            if self.config.token:
                self.session.headers["Authorization"] = self.config.token
        self._rate_limit = RateLimit()

    @property
    def rate_limit(self) -> RateLimit:
        """Rate-limit counters recorded from the last response."""
        return self._rate_limit

    def build_url(self, endpoint_or_path: str, **path_params) -> str:
        """
        Build a fully qualified URL from either an endpoint constant name on
        MODRINTHAPIURLS (e.g. "PROJECT") or a relative path template
        (e.g. "/project/{id}"). Path parameters are substituted into the template.
        """
        if not endpoint_or_path.startswith("/"):
            if not hasattr(MODRINTHAPIURLS, endpoint_or_path):
                raise KeyError(
                    f"Unknown endpoint name: {endpoint_or_path!r}. "
                    f"Available: {', '.join(MODRINTHAPIURLS.list_names())}"
                )
            template = getattr(MODRINTHAPIURLS, endpoint_or_path)
        else:
            template = endpoint_or_path

        try:
            path = template.format(**path_params) if path_params else template
        except KeyError as exc:
            missing = exc.args[0] if exc.args else "unknown"
            raise ValueError(f"Missing required path parameter: {missing} for template {template!r}") from exc
        return f"{self.base_url}{path}"

    def request(
        self,
        method: str,
        endpoint_or_path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Any] = None,
        path_params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Perform one HTTP request and return the decoded JSON body.

        Raises
        ------
        ModrinthError subclass
            Mapped from the HTTP status for responses >= 400.
        NetworkError
            On requests-level failures (connection errors, timeouts).
        InvalidResponseError
            When a successful response does not contain valid JSON.
        """
        method = method.upper()
        url = self.build_url(endpoint_or_path, **(path_params or {}))
        logger.debug("%s %s params=%s", method, url, params)

        try:
            resp = self.session.request(
                method,
                url,
                params=_encode_params(params),
                json=json_body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Connection error for {url}: {exc}") from exc

        self._update_rates(resp)

        if resp.status_code >= 400:
            content = resp.text[:1000] if resp.text else ""
            raise map_http_status(resp.status_code, content, resp)

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise InvalidResponseError(f"Invalid JSON received from {url}: {exc}", resp.status_code, resp) from exc

    def get(self, endpoint_or_path: str, *, params: Optional[Dict[str, Any]] = None, **path_params) -> Optional[Any]:
        """Fail-soft GET: returns the parsed JSON, or None if the call failed."""
        try:
            return self.request("GET", endpoint_or_path, params=params, path_params=path_params)
        except ModrinthError as exc:
            logger.warning("GET %s failed: %s", endpoint_or_path, exc)
            return None

    def post(self, endpoint_or_path: str, payload: Any, *, params: Optional[Dict[str, Any]] = None,
             **path_params) -> Optional[Any]:
        """
        Fail-soft POST with a JSON body: returns the parsed JSON, or None if the call failed.

        Raises
        ------
        InvalidArgumentError
            If `payload` is None (the message body is required).
        """
        if payload is None:
            raise InvalidArgumentError("POST requires a message body")
        try:
            return self.request("POST", endpoint_or_path, params=params, json_body=payload, path_params=path_params)
        except ModrinthError as exc:
            logger.warning("POST %s failed: %s", endpoint_or_path, exc)
            return None

    def _update_rates(self, resp: requests.Response) -> None:
        headers = getattr(resp, "headers", None)
        if headers is None:
            return
        self._rate_limit = RateLimit.from_headers(headers)
        logger.debug("Rate limit: %d/%d remaining, reset in %ds",
                     self._rate_limit.remaining, self._rate_limit.limit, self._rate_limit.reset)
