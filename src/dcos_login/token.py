"""Locate and decode the ACS token payload embedded in the DC/OS token page."""

import base64
import binascii
import json
import re

from .exceptions import DecodeError, ParseError, TokenExtractionError
from .selectors import TOKEN_PATTERN

_token_matcher = re.compile(TOKEN_PATTERN)


def find_token_payload(script: str) -> str:
    """Pull the base64 token payload out of inline script text.

    The DC/OS frontend exposes the token as ``var value ... "<payload>" ...;``.
    This is a heuristic over page source, keep it in this one place.

    Raises:
        TokenExtractionError: If the script has no such assignment.
    """
    match = _token_matcher.search(script)
    if not match:
        raise TokenExtractionError("Couldn't extract ACS token from response")
    return match.group(1)


def decode_id_token(payload: str) -> str:
    """Decode a base64 JSON payload and return its id_token.

    The token itself is not verified, the page that issued it is trusted.

    Raises:
        DecodeError: If payload is not standard base64.
        ParseError: If the decoded data is not a JSON object with a string id_token.
    """
    if not payload:
        raise DecodeError("Token payload is empty")
    try:
        raw = base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise DecodeError(f"Token payload is not valid base64: {e}") from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError(f"Token payload is not JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError("Token payload is not a JSON object")
    id_token = data.get("id_token")
    if not isinstance(id_token, str):
        raise ParseError("Token payload has no string id_token field")
    return id_token
