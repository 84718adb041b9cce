"""Unattended login to Community Edition DC/OS clusters.

Replays the browser SSO flow (DC/OS -> Auth0 -> GitHub) over HTTP and returns
the cluster's ACS token.
"""

__version__ = "0.1.0"

from .config import LoginConfig
from .exceptions import (
    ConfigurationError,
    CSRFExtractionError,
    DCOSLoginError,
    DeadlineExceededError,
    DecodeError,
    LoginCancelledError,
    MarkupExtractionError,
    MissingIdentityError,
    ParseError,
    StatusError,
    TokenExtractionError,
    TransportError,
    UnexpectedResponseError,
)
from .flow import LoginFlow, login

__all__ = [
    "LoginConfig",
    "LoginFlow",
    "login",
    "DCOSLoginError",
    "ConfigurationError",
    "TransportError",
    "DeadlineExceededError",
    "LoginCancelledError",
    "StatusError",
    "MissingIdentityError",
    "MarkupExtractionError",
    "CSRFExtractionError",
    "UnexpectedResponseError",
    "TokenExtractionError",
    "DecodeError",
    "ParseError",
]
