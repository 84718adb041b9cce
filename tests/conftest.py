"""Pytest fixtures for DC/OS login tests."""

from pathlib import Path
from typing import Callable

import httpx
import pytest

from dcos_login.config import LoginConfig
from dcos_login.parsers import Document

FIXTURES_DIR = Path(__file__).parent / "fixtures"

CLUSTER_URL = "https://cluster.example.com"
AUTH0_AUTHORIZE = "https://dcos.auth0.com/authorize"
GITHUB_SESSION = "https://github.com/session"
GITHUB_AUTHORIZE = "https://github.com/login/oauth/authorize"


def read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text()


def base_url(request: httpx.Request) -> str:
    """Scheme, host and path of a request, without the query string."""
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"


class FakeSite:
    """Route table for httpx.MockTransport that records every request.

    Routes are keyed by (method, url without query) and map to a callable
    taking the request and returning a fresh httpx.Response.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, url: str, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, url)] = respond

    def html(self, method: str, url: str, name: str, status_code: int = 200, headers: dict | None = None) -> None:
        text = read_fixture(name)
        self.add(method, url, lambda request: httpx.Response(status_code, text=text, headers=headers))

    def redirect(self, method: str, url: str, location: str, headers: dict | None = None) -> None:
        self.add(method, url, lambda request: httpx.Response(302, headers={"Location": location, **(headers or {})}))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, base_url(request)))
        if route is None:
            return httpx.Response(404, text=f"no route for {request.method} {base_url(request)}")
        return route(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str | None = None) -> list[str]:
        return [f"{r.method} {base_url(r)}" for r in self.requests if method is None or r.method == method]


@pytest.fixture
def load_fixture():
    """Factory fixture to load HTML fixtures as Documents."""

    def _load(name: str) -> Document:
        return Document(read_fixture(name))

    return _load


@pytest.fixture
def config() -> LoginConfig:
    return LoginConfig(cluster_url=CLUSTER_URL, username="octocat", password="hunter2")


@pytest.fixture
def site() -> FakeSite:
    """A fake cluster, Auth0 and GitHub answering the happy path (direct link)."""
    fake = FakeSite()
    fake.redirect("GET", f"{CLUSTER_URL}/login", f"{AUTH0_AUTHORIZE}?cluster_id=foo&client=bar&scope=openid")
    fake.html("GET", AUTH0_AUTHORIZE, "auth0_authorize.html")
    fake.html("POST", GITHUB_SESSION, "github_redirect.html")
    fake.html("GET", "https://cluster/login", "token_page.html")
    return fake
