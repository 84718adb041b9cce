"""DC/OS login flow: cluster -> Auth0 -> GitHub -> cluster token page.

DC/OS Community Edition delegates login to Auth0, which in turn uses GitHub.
None of these pages are an API; the flow replays what a browser does and
scrapes the state each page hands to the next one.
"""

import threading
from contextlib import contextmanager
from typing import Iterator

import httpx

from .client import SessionClient, TraceSink, dump_response
from .config import LoginConfig
from .exceptions import ConfigurationError, DCOSLoginError
from .parsers import (
    ClusterIdentity,
    Document,
    Granted,
    parse_authorization,
    parse_cluster_identity,
    parse_csrf_token,
    parse_token_page,
)
from .selectors import AUTHORIZE_QUERY, LOGIN_QUERY, get_url_patterns
from .token import decode_id_token


@contextmanager
def _step(name: str) -> Iterator[None]:
    """Tag errors raised inside a login step with the step name."""
    try:
        yield
    except DCOSLoginError as e:
        if e.step is None:
            e.step = name
        raise


class LoginFlow:
    """One unattended login attempt against a DC/OS cluster.

    Each instance owns its own HTTP session and can run once. Use a new
    instance for every attempt.
    """

    def __init__(
        self,
        config: LoginConfig,
        *,
        trace: TraceSink | None = None,
        cancel: threading.Event | None = None,
        transport: httpx.BaseTransport | None = None,
        urls: dict[str, str] | None = None,
    ):
        """Initialize the flow.

        Args:
            config: Cluster URL, credentials and transport settings
            trace: Diagnostic sink, only used when config.trace is set
            cancel: Event that aborts the flow before its next request
            transport: Optional httpx transport for the session
            urls: Endpoint overrides, see selectors.URL_PATTERNS
        """
        self.config = config
        self.urls = get_url_patterns(urls)
        self.trace = trace if config.trace else None
        self.cancel = cancel
        self.transport = transport
        self.client: SessionClient | None = None

    def _open_client(self) -> SessionClient:
        # The deadline clock starts here, not at construction
        return SessionClient(
            verify=self.config.verify_tls,
            trace=self.trace,
            timeout=self.config.request_timeout,
            deadline=self.config.timeout,
            cancel=self.cancel,
            transport=self.transport,
        )

    def login(self) -> str:
        """Run the whole flow and return the ACS token.

        Raises:
            DCOSLoginError: On any failure, tagged with the failing step.
            RuntimeError: If this flow already ran.
        """
        if self.client is not None:
            raise RuntimeError("LoginFlow instances are single-use")
        self.client = self._open_client()

        try:
            # Hit the DC/OS login endpoint to retrieve the cluster and client IDs
            with _step("initiate"):
                identity = self.initiate_login()

            # DC/OS uses Auth0, start its session to get the CSRF token
            with _step("authorize-session"):
                csrf_token = self.initiate_auth0(identity)

            # Authenticate with GitHub, land on the page holding the token
            with _step("credential-submission"):
                token_page = self.github_authenticate(csrf_token)

            with _step("token-extraction"):
                return self.extract_token(token_page)
        finally:
            self.client.close()

    def initiate_login(self) -> ClusterIdentity:
        response = self.client.get(
            f"{self.config.cluster_url}{self.urls['cluster_login']}",
            LOGIN_QUERY,
        )
        # The IDs are on the URL reached after redirects, not in the body
        return parse_cluster_identity(response.url)

    def initiate_auth0(self, identity: ClusterIdentity) -> str:
        params = {
            **AUTHORIZE_QUERY,
            "cluster_id": identity.cluster_id,
            "client_id": identity.client_id,
        }
        response = self.client.get(self.urls["auth0_authorize"], params)
        return parse_csrf_token(Document.from_response(response))

    def github_authenticate(self, csrf_token: str) -> httpx.Response:
        response = self.client.post_form(
            self.urls["github_session"],
            {
                "login": self.config.username,
                "password": self.config.password,
                "authenticity_token": csrf_token,
            },
        )
        return self.follow_login_redirect(response)

    def follow_login_redirect(self, response: httpx.Response) -> httpx.Response:
        """Continue from GitHub's credential response to the token page."""
        dump = dump_response(response) if self.client.tracing else None
        decision = parse_authorization(Document.from_response(response), dump)

        # Easy path, no re-authorization
        if isinstance(decision, Granted):
            return self.client.get(str(response.url.join(decision.redirect_url)))

        # GitHub is asking to re-authorize the OAuth app
        return self.client.post_form(self.urls["github_authorize"], decision.fields)

    def extract_token(self, response: httpx.Response) -> str:
        payload = parse_token_page(Document.from_response(response))
        return decode_id_token(payload)


def login(
    config: LoginConfig | None = None,
    *,
    trace: TraceSink | None = None,
    cancel: threading.Event | None = None,
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Log in to a DC/OS cluster with GitHub credentials and return the ACS token.

    Args:
        config: LoginConfig instance. If None, loads from environment.
        trace: Diagnostic sink used when config.trace is set
        cancel: Event that aborts the attempt
        transport: Optional httpx transport

    Raises:
        ConfigurationError: If required settings are missing.
        DCOSLoginError: If any step of the flow fails.
    """
    config = config or LoginConfig.from_env()
    problems = config.validate()
    if problems:
        raise ConfigurationError(f"Missing configuration: {', '.join(problems)}")

    return LoginFlow(config, trace=trace, cancel=cancel, transport=transport).login()
