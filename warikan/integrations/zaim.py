"""Zaim ledger API interactions."""

from typing import Any

import requests

from warikan.config import ZaimCredentials
from warikan.errors import ApiError
from warikan.integrations.oauth1 import authorization_header, oauth_parameters

API_BASE_URL = "https://api.zaim.net/v2"


def call_api(path: str, credentials: ZaimCredentials, params: dict[str, str] | None = None) -> dict[str, Any]:
    """Send a signed GET request to the Zaim API.

    Args:
        path: API path below API_BASE_URL, e.g. "/home/account".
        credentials: OAuth 1.0a credentials.
        params: Query parameters.

    Returns:
        Decoded JSON response.

    Raises:
        ApiError: If the API answers with a non-200 status.
        requests.RequestException: If the request itself fails.
    """
    url = f"{API_BASE_URL}{path}"
    query = dict(params or {})
    oauth = oauth_parameters("GET", url, query, credentials)
    headers = {
        "Authorization": authorization_header(oauth),
        "Accept": "application/json",
    }
    response = requests.get(url, headers=headers, params=query)
    if response.status_code != 200:
        raise ApiError("Zaim", response.status_code, response.text)
    return response.json()


def get_accounts(credentials: ZaimCredentials) -> list[dict[str, Any]]:
    """Fetch all accounts.

    Returns:
        List of account dictionaries ({id, name, active, ...}).
    """
    return call_api("/home/account", credentials, {"mapping": "1"}).get("accounts") or []


def get_transactions(credentials: ZaimCredentials) -> list[dict[str, Any]]:
    """Fetch the full transaction history.

    Card refunds arrive through to_account_id, so the history is not
    narrowed by account on the server.

    Returns:
        List of transaction dictionaries ({id, date, amount, from_account_id, to_account_id, ...}).
    """
    return call_api("/home/money", credentials, {"mapping": "1"}).get("money") or []
