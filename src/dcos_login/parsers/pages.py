"""Parsers for the individual pages of the login flow.

Each function works on an already fetched page, without network access, so
the markup-dependent logic can be checked against fixtures.
"""

from dataclasses import dataclass

import httpx

from ..exceptions import CSRFExtractionError, MissingIdentityError, TokenExtractionError, UnexpectedResponseError
from ..selectors import IDENTITY_PARAMS, get_selectors
from ..token import find_token_payload
from .base import Document


@dataclass(frozen=True)
class ClusterIdentity:
    """Identifiers the cluster login redirect hands to Auth0."""

    cluster_id: str
    client_id: str


@dataclass(frozen=True)
class Granted:
    """GitHub already trusts the app and links straight back to the cluster."""

    redirect_url: str


@dataclass(frozen=True)
class NeedsConfirmation:
    """GitHub wants the OAuth app re-authorized; fields to submit back."""

    fields: dict[str, list[str]]


AuthorizationDecision = Granted | NeedsConfirmation


def parse_cluster_identity(url: httpx.URL | str) -> ClusterIdentity:
    """Read cluster_id and client off the URL the cluster login redirected to.

    Raises:
        MissingIdentityError: If either parameter is missing or empty.
    """
    params = httpx.URL(str(url)).params
    cluster_id = params.get(IDENTITY_PARAMS["cluster_id"], "")
    client_id = params.get(IDENTITY_PARAMS["client_id"], "")

    missing = [name for name, value in (("cluster_id", cluster_id), ("client", client_id)) if not value]
    if missing:
        raise MissingIdentityError(f"Login redirect is missing {', '.join(missing)}: {url}")
    return ClusterIdentity(cluster_id=cluster_id, client_id=client_id)


def parse_csrf_token(doc: Document) -> str:
    """Extract the authenticity_token hidden input from the Auth0 authorize page."""
    selectors = get_selectors()
    token = doc.find_attribute(selectors["csrf_input"], selectors["csrf_attr"])
    if token is None:
        raise CSRFExtractionError("Unable to extract CSRF token from response")
    return token


def parse_authorization(doc: Document, dump: str | None = None) -> AuthorizationDecision:
    """Decide how to continue after submitting GitHub credentials.

    Args:
        doc: GitHub's response to the credential POST
        dump: Raw response attached to the error when nothing matches

    Returns:
        Granted if the page links back to the cluster, NeedsConfirmation if it
        holds the OAuth authorize form.

    Raises:
        UnexpectedResponseError: If the page has neither.
    """
    selectors = get_selectors()

    redirect_url = doc.find_attribute(selectors["direct_link"], selectors["direct_link_attr"])
    if redirect_url is not None:
        return Granted(redirect_url=redirect_url)

    if doc.count(selectors["authorize_form"]) != 1:
        raise UnexpectedResponseError("Unexpected Github response", dump)

    fields: dict[str, list[str]] = {"authorize": ["1"]}
    for name, value in doc.iter_form_fields(selectors["authorize_form"]):
        fields.setdefault(name, []).append(value)
    return NeedsConfirmation(fields=fields)


def parse_token_page(doc: Document) -> str:
    """Return the base64 token payload from the last inline script."""
    script = doc.find_text(get_selectors()["token_script"], occurrence="last")
    if script is None:
        raise TokenExtractionError("Token page has no inline script")
    return find_token_payload(script)
