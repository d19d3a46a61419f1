"""HTTP fetching with exponential backoff and bounded retries."""

from __future__ import annotations

import http.client
import logging
import time
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Mapping
from urllib.parse import urlsplit, urlunsplit

log = logging.getLogger(__name__)

_HTTP_2XX = 2
_HTTP_4XX = 4


class FetchError(Exception):
    """Base class for errors raised while fetching data."""


class FetchTimeoutError(FetchError):
    """The maximum number of retries was reached."""


class NotFoundError(FetchError):
    """The server answered with a 4xx status."""


class InvalidURLError(FetchError):
    """The URL is empty, malformed or not an HTTP URL."""


class ServerError(FetchError):
    """The server answered with a status other than 2xx or 4xx."""


class NetworkError(FetchError):
    """The request could not be completed."""


def exp_backoff(interval: float, maximum: float) -> float:
    """Double the interval, capped at maximum."""
    return min(interval * 2, maximum)


@dataclass
class HttpClient:
    """Fetches URLs, retrying server and network failures with backoff.

    Durations are in seconds.
    """

    initial_backoff: float = 0.05
    max_backoff: float = 5.0
    max_retries: int = 15
    header: Mapping[str, str] | None = None
    timeout: float = 10.0

    def get_retry(self, rawurl: str) -> bytes:
        """Fetch a URL, retrying on server and network errors."""
        if rawurl == "":
            raise InvalidURLError("URL is empty. Skipping.")
        try:
            parts = urlsplit(rawurl)
        except ValueError as exc:
            raise InvalidURLError(str(exc)) from exc

        if not parts.scheme.startswith("http"):
            raise InvalidURLError(
                f"URL {rawurl} does not have a valid HTTP scheme. Skipping."
            )

        data_url = urlunsplit(parts)
        duration = self.initial_backoff
        for attempt in range(1, self.max_retries + 1):
            log.info("Fetching data from %s. Attempt #%d", data_url, attempt)
            try:
                return self.get(data_url)
            except (NetworkError, ServerError) as exc:
                log.warning("%s", exc)
            duration = exp_backoff(duration, self.max_backoff)
            log.info("Sleeping for %ss...", duration)
            time.sleep(duration)

        raise FetchTimeoutError(
            f"Unable to fetch data. Maximum retries reached: {self.max_retries}"
        )

    def get(self, data_url: str) -> bytes:
        """Fetch a URL once and return the body of a 2xx response."""
        try:
            request = urllib.request.Request(
                data_url, headers=dict(self.header or {}), method="GET"
            )
        except ValueError as exc:
            raise InvalidURLError(str(exc)) from exc

        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                status = response.status
                if status // 100 == _HTTP_2XX:
                    return response.read()
        except urllib.error.HTTPError as exc:
            status = exc.code
            exc.close()
        except urllib.error.URLError as exc:
            raise NetworkError(f"Unable to fetch data: {exc.reason}") from exc
        except (OSError, http.client.HTTPException) as exc:
            raise NetworkError(f"Unable to fetch data: {exc}") from exc

        if status // 100 == _HTTP_4XX:
            raise NotFoundError(f"Not found. HTTP status code: {status}")
        raise ServerError(f"Server error. HTTP status code: {status}")