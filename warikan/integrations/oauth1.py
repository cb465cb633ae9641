"""OAuth 1.0a request signing (HMAC-SHA1, RFC 5849)."""

import base64
import hashlib
import hmac
import time
import uuid
from urllib.parse import quote

from warikan.config import ZaimCredentials

SIGNATURE_METHOD = "HMAC-SHA1"


def percent_encode(value: str) -> str:
    """Percent-encode everything outside the RFC 3986 unreserved set."""
    return quote(str(value), safe="")


def generate_nonce() -> str:
    return uuid.uuid4().hex


def generate_timestamp() -> str:
    return str(int(time.time()))


def signature_base_string(method: str, url: str, params: dict[str, str]) -> str:
    """Build the signature base string.

    Args:
        method: HTTP method, upper case.
        url: Request URL without query string.
        params: OAuth protocol parameters and query parameters together.

    Returns:
        METHOD&enc(url)&enc(sorted, encoded key=value pairs joined by '&').
    """
    encoded = sorted((percent_encode(k), percent_encode(v)) for k, v in params.items())
    param_string = "&".join(f"{k}={v}" for k, v in encoded)
    return f"{method.upper()}&{percent_encode(url)}&{percent_encode(param_string)}"


def sign(base_string: str, consumer_secret: str, token_secret: str = "") -> str:
    """Compute the base64 HMAC-SHA1 signature of a base string."""
    key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"
    digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def oauth_parameters(
    method: str,
    url: str,
    query: dict[str, str],
    credentials: ZaimCredentials,
    timestamp: str | None = None,
    nonce: str | None = None,
) -> dict[str, str]:
    """Build the signed OAuth protocol parameters for a request.

    Args:
        method: HTTP method.
        url: Request URL without query string.
        query: Query parameters that will be sent with the request.
        credentials: Consumer and access token credentials.
        timestamp: Fixed oauth_timestamp, for reproducible signatures.
        nonce: Fixed oauth_nonce, for reproducible signatures.

    Returns:
        OAuth parameters including oauth_signature.
    """
    params = {
        "oauth_consumer_key": credentials.consumer_key,
        "oauth_nonce": nonce or generate_nonce(),
        "oauth_signature_method": SIGNATURE_METHOD,
        "oauth_timestamp": timestamp or generate_timestamp(),
        "oauth_token": credentials.access_token,
        "oauth_version": "1.0",
    }
    base_string = signature_base_string(method, url, {**query, **params})
    params["oauth_signature"] = sign(base_string, credentials.consumer_secret, credentials.access_token_secret)
    return params


def authorization_header(params: dict[str, str]) -> str:
    """Render OAuth parameters as an Authorization header value."""
    pairs = ", ".join(f'{percent_encode(k)}="{percent_encode(v)}"' for k, v in sorted(params.items()))
    return f"OAuth {pairs}"
