"""Cookie-aware HTTP session used for one login attempt."""

import threading
import time
from typing import Any, Callable, Mapping

import httpx

from .exceptions import DeadlineExceededError, LoginCancelledError, StatusError, TransportError

# Browser-like headers, GitHub and Auth0 serve different markup to unknown agents
DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:145.0) Gecko/20100101 Firefox/145.0",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

TraceSink = Callable[[str], None]


def dump_response(response: httpx.Response) -> str:
    """Render a response the way it came over the wire: status, headers, body."""
    lines = [f"{response.http_version} {response.status_code} {response.reason_phrase}"]
    for name, value in response.headers.multi_items():
        lines.append(f"{name}: {value}")
    return "\n".join(lines) + "\n\n" + response.text


class SessionClient:
    """HTTP client shared by every request of a single login attempt.

    The cookie jar spans hosts: cookies set by the cluster, Auth0 or GitHub
    are sent back on later requests to the same host. Never share one
    instance between login attempts.
    """

    def __init__(
        self,
        *,
        verify: bool = True,
        trace: TraceSink | None = None,
        timeout: float = 30.0,
        deadline: float | None = None,
        cancel: threading.Event | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            verify: Validate TLS certificates. False allows self-signed clusters.
            trace: Callable receiving diagnostic lines. None disables tracing.
            timeout: Per-request timeout in seconds.
            deadline: Overall budget in seconds for all requests made by this client.
            cancel: Event that aborts the attempt before the next request when set.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self.trace = trace
        self.timeout = timeout
        self.cancel = cancel
        self._expires_at = time.monotonic() + deadline if deadline is not None else None
        self._client = httpx.Client(
            verify=verify,
            transport=transport,
            follow_redirects=True,
            timeout=timeout,
            headers=DEFAULT_HEADERS,
            event_hooks={"request": [self._before_request]},
        )

    @property
    def tracing(self) -> bool:
        return self.trace is not None

    def _debug(self, message: str) -> None:
        if self.trace is not None:
            self.trace(message)

    def _before_request(self, request: httpx.Request) -> None:
        # Fires for the initial request and for every redirect hop
        self._remaining()
        self._debug(f"{request.method} {request.url}")

    def _remaining(self) -> float | None:
        """Seconds left before the deadline, raising if cancelled or expired."""
        if self.cancel is not None and self.cancel.is_set():
            raise LoginCancelledError("Login cancelled")
        if self._expires_at is None:
            return None
        remaining = self._expires_at - time.monotonic()
        if remaining <= 0:
            raise DeadlineExceededError("Login deadline exceeded")
        return remaining

    def _request_timeout(self) -> float:
        """Time budget for the next request, checking cancellation and deadline."""
        remaining = self._remaining()
        if remaining is None:
            return self.timeout
        return min(self.timeout, remaining)

    def _check_status(self, response: httpx.Response) -> None:
        """Raise StatusError unless 200 <= status <= 206."""
        if 200 <= response.status_code <= 206:
            return
        dump = dump_response(response) if self.tracing else None
        raise StatusError(response.status_code, str(response.url), dump)

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        timeout = self._request_timeout()
        try:
            response = self._client.request(method, url, timeout=timeout, **kwargs)
        except httpx.TimeoutException as e:
            if self._expires_at is not None and time.monotonic() >= self._expires_at:
                raise DeadlineExceededError(f"Login deadline exceeded during {method} {url}") from e
            raise TransportError(f"{method} {url} timed out: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        self._check_status(response)
        return response

    def get(self, url: str, params: Mapping[str, str] | None = None) -> httpx.Response:
        """GET with redirects followed and the status gate applied.

        Args:
            url: Absolute URL
            params: Query parameters appended to the URL, if any

        Returns:
            Final response after redirects
        """
        if params:
            return self._send("GET", url, params=dict(params))
        return self._send("GET", url)

    def post_form(self, url: str, data: Mapping[str, str | list[str]]) -> httpx.Response:
        """POST an URL-encoded form with the status gate applied.

        List values are sent as repeated fields, in order.
        """
        return self._send("POST", url, data=dict(data))

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "SessionClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
