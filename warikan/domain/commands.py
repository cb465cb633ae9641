"""Pure parsing of chat commands that change the advance-payment ledger.

Parsers return (result, error) tuples instead of raising, so the bot can
answer malformed input with a reason.
"""

import re
from dataclasses import dataclass
from datetime import date

from warikan.domain.models import Money, Payer

ADD_KEYWORD = "建て替え追加"
DELETE_KEYWORD = "削除"

_DATE_TOKEN = re.compile(r"^(\d{1,2})/(\d{1,2})$")


@dataclass(frozen=True)
class ParsedAdvancePayment:
    """Validated contents of an add command."""

    date: date
    payer: Payer
    amount: Money
    memo: str


def _strip_keyword(text: str, keyword: str) -> str:
    return re.sub(re.escape(keyword) + r"\s*", "", text, count=1).strip()


def parse_amount(text: str) -> int | None:
    """Parse a positive whole-yen amount, allowing thousands separators."""
    cleaned = text.replace(",", "")
    if not cleaned.isdecimal():
        return None
    value = int(cleaned)
    return value if value > 0 else None


def parse_add_command(text: str, today: date) -> tuple[ParsedAdvancePayment | None, str | None]:
    """Parse '建て替え追加 [M/D] 支払者 金額 メモ...'.

    Args:
        text: Full chat message.
        today: Date used when no M/D is given, and the year for M/D.

    Returns:
        Tuple of (parsed, error):
        - parsed: ParsedAdvancePayment on success, None on failure
        - error: Reason for the failure, None on success
    """
    tokens = _strip_keyword(text, ADD_KEYWORD).split()

    payment_date = today
    if tokens:
        match = _DATE_TOKEN.match(tokens[0])
        if match:
            try:
                payment_date = date(today.year, int(match.group(1)), int(match.group(2)))
            except ValueError:
                return None, f"日付が正しくありません: {tokens[0]}"
            tokens = tokens[1:]

    if len(tokens) < 2:
        return None, "入力形式が正しくありません"

    payer_text, amount_text = tokens[0], tokens[1]
    memo = " ".join(tokens[2:]).strip()

    try:
        payer = Payer.from_string(payer_text)
    except ValueError:
        return None, f"支払者は「夫」または「妻」で指定してください: {payer_text}"

    amount = parse_amount(amount_text)
    if amount is None:
        return None, f"金額は正の整数で指定してください: {amount_text}"

    if not memo:
        return None, "メモを入力してください"

    return ParsedAdvancePayment(date=payment_date, payer=payer, amount=Money(amount), memo=memo), None


def parse_delete_command(text: str) -> str | None:
    """Extract the record id from '削除 <id>', or None when it is missing."""
    record_id = _strip_keyword(text, DELETE_KEYWORD)
    return record_id or None
