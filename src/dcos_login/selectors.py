"""Centralized CSS selectors, endpoints and patterns for the DC/OS login flow.

Every value here mirrors markup or redirect conventions of third-party pages
(DC/OS, Auth0, GitHub). When one of them changes shape, this is the only
module that should need an update.
"""

SELECTORS = {
    # Auth0 /authorize page
    "csrf_input": 'input[name="authenticity_token"]',
    "csrf_attr": "value",
    # GitHub /session response, already authorized
    "direct_link": ".container div p a",
    "direct_link_attr": "href",
    # GitHub /session response, re-authorization required
    "authorize_form": 'form[action="/login/oauth/authorize"]',
    # DC/OS token page
    "token_script": 'script[type="text/javascript"]',
}

URL_PATTERNS = {
    "cluster_login": "/login",
    "auth0_authorize": "https://dcos.auth0.com/authorize",
    "github_session": "https://github.com/session",
    "github_authorize": "https://github.com/login/oauth/authorize",
}

# Query parameters read off the URL the cluster login redirects to
IDENTITY_PARAMS = {
    "cluster_id": "cluster_id",
    "client_id": "client",
}

LOGIN_QUERY = {
    "redirect_uri": "urn:ietf:wg:oauth:2.0:oob",
}

AUTHORIZE_QUERY = {
    "scope": "openid email",
    "response_type": "token",
    "connection": "github",
    "owp": "true",
}

# The DC/OS frontend assigns the base64 token payload to a JS variable
TOKEN_PATTERN = r'var value [^"]+"([^"]+)"[^;]+;'


def get_selectors() -> dict[str, str]:
    """Get a copy of the CSS selectors."""
    return SELECTORS.copy()


def get_url_patterns(overrides: dict[str, str] | None = None) -> dict[str, str]:
    """Get endpoint URLs, optionally overriding some of them.

    Args:
        overrides: Endpoint names mapped to replacement URLs.

    Returns:
        Dict of endpoint names to URLs.
    """
    result = URL_PATTERNS.copy()
    if overrides:
        unknown = set(overrides) - set(result)
        if unknown:
            raise KeyError(f"Unknown endpoints: {', '.join(sorted(unknown))}")
        result.update(overrides)
    return result
