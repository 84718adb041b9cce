"""Custom exceptions for DC/OS login."""


class DCOSLoginError(Exception):
    """Base exception for DC/OS login errors.

    ``step`` names the login step that failed, when known.
    """

    def __init__(self, message: str, *, step: str | None = None):
        super().__init__(message)
        self.message = message
        self.step = step

    def __str__(self) -> str:
        if self.step:
            return f"[{self.step}] {self.message}"
        return self.message


class ConfigurationError(DCOSLoginError):
    """Required configuration is missing or invalid."""

    pass


class TransportError(DCOSLoginError):
    """Network or TLS failure while talking to a remote host."""

    pass


class DeadlineExceededError(TransportError):
    """The overall login deadline passed before the flow completed."""

    pass


class LoginCancelledError(DCOSLoginError):
    """The login attempt was cancelled by the caller."""

    pass


class StatusError(DCOSLoginError):
    """Response status outside the accepted 200-206 range."""

    def __init__(self, status_code: int, url: str, dump: str | None = None, *, step: str | None = None):
        message = f"Expected status 200 <= code <= 206, got {status_code} from {url}"
        if dump:
            message = f"{message}\n{dump}"
        super().__init__(message, step=step)
        self.status_code = status_code
        self.url = url
        self.dump = dump


class MissingIdentityError(DCOSLoginError):
    """Cluster login redirect lacks the cluster_id or client parameter."""

    pass


class MarkupExtractionError(DCOSLoginError):
    """An expected element or attribute is absent from a page."""

    pass


class CSRFExtractionError(MarkupExtractionError):
    """The Auth0 authorize page has no authenticity_token input."""

    pass


class UnexpectedResponseError(DCOSLoginError):
    """GitHub answered with neither a redirect link nor an authorize form."""

    def __init__(self, message: str, dump: str | None = None, *, step: str | None = None):
        if dump:
            message = f"{message}\n{dump}"
        super().__init__(message, step=step)
        self.dump = dump


class TokenExtractionError(DCOSLoginError):
    """No token payload found in the token page scripts."""

    pass


class DecodeError(DCOSLoginError):
    """Token payload is not valid base64."""

    pass


class ParseError(DCOSLoginError):
    """Decoded token payload is not a JSON object with a string id_token."""

    pass
