"""LINE Messaging API interactions."""

import requests

from warikan.errors import ApiError

REPLY_URL = "https://api.line.me/v2/bot/message/reply"

# LINE rejects text messages longer than this, counted in UTF-16 code units.
MAX_TEXT_LENGTH = 5000


def truncate_text(text: str, limit: int = MAX_TEXT_LENGTH) -> str:
    """Cut text to at most `limit` UTF-16 code units without splitting a surrogate pair."""
    encoded = text.encode("utf-16-le")
    if len(encoded) <= limit * 2:
        return text
    return encoded[: limit * 2].decode("utf-16-le", errors="ignore")


def reply_message(token: str, reply_token: str, text: str) -> None:
    """Reply to a webhook event with a single text message.

    Args:
        token: Channel access token.
        reply_token: Reply token from the webhook event.
        text: Message text; truncated to MAX_TEXT_LENGTH UTF-16 code units.

    Raises:
        ApiError: If the API answers with a non-200 status.
        requests.RequestException: If the request itself fails.
    """
    headers = {
        "Content-Type": "application/json; charset=UTF-8",
        "Authorization": f"Bearer {token}",
    }
    payload = {
        "replyToken": reply_token,
        "messages": [{"type": "text", "text": truncate_text(text)}],
    }
    response = requests.post(REPLY_URL, headers=headers, json=payload)
    if response.status_code != 200:
        raise ApiError("LINE", response.status_code, response.text)
