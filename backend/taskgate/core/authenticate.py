"""Basic Authentication — pure verification of an Authorization header.

Invariants:
    - verify_basic_auth() never raises; any malformed input yields False
    - Only the exact scheme "Basic" is accepted
    - Comparison is exact plaintext equality against the credential table

Design Decisions:
    - Split on the FIRST separator only: passwords may contain ':' and spaces
    - Strict base64 (validate=True): stray characters and missing "=" padding are a
      failed login, not a guess
"""

import base64
import binascii
from typing import Mapping


def verify_basic_auth(header_value: str, credentials: Mapping[str, str]) -> bool:
    """Return True iff header_value carries Basic credentials found in the table."""
    parsed = parse_basic_credentials(header_value)
    if parsed is None:
        return False
    username, password = parsed
    stored = credentials.get(username)
    return stored is not None and stored == password


def parse_basic_credentials(header_value: str) -> tuple[str, str] | None:
    """Extract (username, password) from 'Basic <base64>' or None."""
    scheme, _, encoded = (header_value or "").partition(" ")
    if scheme != "Basic" or not encoded:
        return None

    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return None

    username, _, password = decoded.partition(":")
    if not username or not password:
        return None
    return username, password
