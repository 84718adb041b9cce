"""Configuration handling for DC/OS login."""

import os
from dataclasses import dataclass, field

from .exceptions import ConfigurationError


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


def _env_seconds(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from None


@dataclass
class LoginConfig:
    """Configuration for one login attempt.

    Configuration can be loaded from:
    1. Environment variables (CLUSTER_URL, GH_USERNAME, GH_PASSWORD)
    2. Explicit parameters

    TLS verification is enabled by default. Set ``allow_insecure_tls`` when the
    cluster uses a self-signed certificate.

    ``trace`` enables very verbose output of every request and, on failures,
    of raw responses. Those dumps can contain credentials and tokens.
    """

    cluster_url: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    allow_insecure_tls: bool = False
    trace: bool = False
    timeout: float = 60.0
    request_timeout: float = 30.0

    def __post_init__(self) -> None:
        self.cluster_url = self.cluster_url.rstrip("/")

    @property
    def verify_tls(self) -> bool:
        return not self.allow_insecure_tls

    @classmethod
    def from_env(cls) -> "LoginConfig":
        """Load configuration from environment variables.

        Environment variables:
            CLUSTER_URL: URL of the DC/OS master(s) (e.g. https://example.com)
            GH_USERNAME: GitHub username
            GH_PASSWORD: GitHub password
            DCOS_INSECURE: Set to "true" to skip TLS certificate validation
            DCOS_DEBUG: Set to "true" to trace requests (prints credentials)
            DCOS_TIMEOUT: Overall login timeout in seconds
            DCOS_REQUEST_TIMEOUT: Per-request timeout in seconds

        Returns:
            LoginConfig instance
        """
        return cls(
            cluster_url=os.environ.get("CLUSTER_URL", ""),
            username=os.environ.get("GH_USERNAME", ""),
            password=os.environ.get("GH_PASSWORD", ""),
            allow_insecure_tls=_env_flag("DCOS_INSECURE"),
            trace=_env_flag("DCOS_DEBUG"),
            timeout=_env_seconds("DCOS_TIMEOUT", 60.0),
            request_timeout=_env_seconds("DCOS_REQUEST_TIMEOUT", 30.0),
        )

    def validate(self) -> list[str]:
        """Validate configuration, returning list of problems.

        Returns:
            List of missing or invalid field descriptions.
        """
        problems = []
        if not self.cluster_url:
            problems.append("cluster_url (CLUSTER_URL)")
        elif not self.cluster_url.startswith(("http://", "https://")):
            problems.append("cluster_url must start with http:// or https://")
        if not self.username:
            problems.append("username (GH_USERNAME)")
        if not self.password:
            problems.append("password (GH_PASSWORD)")
        if self.timeout <= 0:
            problems.append("timeout must be positive")
        if self.request_timeout <= 0:
            problems.append("request_timeout must be positive")
        return problems
