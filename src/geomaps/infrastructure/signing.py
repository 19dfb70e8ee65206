"""URL signing for enterprise (client id + signing key) credentials.

See https://developers.google.com/maps/documentation/business/webservices/auth
"""

import base64
import binascii
import hashlib
import hmac
import re

_SECRET_PARAMS = re.compile(r"(?<=[?&])(key|signature)=[^&]*")


def sign_url(signing_key: str, path: str, query: str) -> str:
    """Compute the URL signature for ``path?query``.

    Args:
        signing_key: URL-safe base64 encoded private key
        path: URL path, e.g. ``/maps/api/geocode/json``
        query: Already encoded query string (without the leading ``?``)

    Returns:
        URL-safe base64 encoded HMAC-SHA1 signature

    Raises:
        ValueError: If the signing key is not valid URL-safe base64
    """
    try:
        decoded_key = base64.urlsafe_b64decode(signing_key)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Signing key is not valid URL-safe base64: {e}") from e

    digest = hmac.new(decoded_key, f"{path}?{query}".encode("utf-8"), hashlib.sha1).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii")


def redact_url(url: str) -> str:
    """Hide API key and signature values before a URL is logged."""
    return _SECRET_PARAMS.sub(r"\1=REDACTED", url)
