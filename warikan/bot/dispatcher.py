"""Route chat messages to the matching use case and build the reply."""

import logging
import sqlite3
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Any

from warikan import services
from warikan.bot import text as replies
from warikan.config import Settings
from warikan.dates import extract_year_month, has_month_specification
from warikan.domain.commands import ADD_KEYWORD, DELETE_KEYWORD, parse_add_command, parse_delete_command
from warikan.integrations import line

logger = logging.getLogger(__name__)

USAGE_KEYWORD = "使い方"
FORMAT_KEYWORD = "フォーマット"
CARD_KEYWORD = "カード支払い"
ADVANCE_KEYWORD = "建て替え"
GREETING_KEYWORD = "hello"

# (reply_token, text) -> None
ReplySender = Callable[[str, str], None]


@dataclass
class BotContext:
    """Everything the dispatcher needs, injected by the caller."""

    settings: Settings
    fetch_ledger: services.LedgerFetcher = services.fetch_ledger
    today: Callable[[], date] | None = None
    send_reply: ReplySender | None = None

    def current_date(self) -> date:
        return self.today() if self.today is not None else self.settings.today()

    def reply(self, reply_token: str, message: str) -> None:
        if self.send_reply is not None:
            self.send_reply(reply_token, message)
        else:
            line.reply_message(self.settings.line_token(), reply_token, message)


def handle_add(message: str, context: BotContext) -> str:
    parsed, error = parse_add_command(message, context.current_date())
    if parsed is None:
        return replies.add_format_help(error)

    try:
        services.add_advance_payment(context.settings, parsed.date, parsed.payer, parsed.amount, parsed.memo)
    except sqlite3.Error as e:
        logger.exception("Failed to add advance payment")
        return replies.add_failed(e)
    return replies.added(parsed)


def handle_delete(message: str, context: BotContext) -> str:
    record_id = parse_delete_command(message)
    if record_id is None:
        return replies.DELETE_USAGE

    try:
        removed = services.delete_advance_payment(context.settings, record_id)
    except sqlite3.Error as e:
        logger.exception("Failed to delete advance payment %s", record_id)
        return replies.delete_failed(record_id, e)
    return replies.deleted(record_id) if removed else replies.delete_not_found(record_id)


def handle_card(message: str, context: BotContext) -> str:
    year_month = extract_year_month(message, context.current_date())
    settlement = services.get_card_settlement(context.settings, year_month, context.fetch_ledger)
    return settlement.format_message()


def handle_advance_payments(message: str, context: BotContext) -> str:
    if not has_month_specification(message):
        return replies.companion_app(context.settings.web_app_url)

    payment_month = extract_year_month(message, context.current_date())
    start, end, payments, settlement = services.get_cycle_payments(context.settings, payment_month)
    return replies.cycle_report(payment_month, start, end, payments, settlement)


def dispatch(message: str, context: BotContext) -> str | None:
    """Pick the reply for a chat message.

    Keywords are checked in priority order. Unmatched messages get no
    reply at all.

    Args:
        message: Text of the incoming chat message.
        context: Injected settings and collaborators.

    Returns:
        Reply text, or None when the message is not a command.
    """
    if USAGE_KEYWORD in message:
        return replies.USAGE_HELP
    if FORMAT_KEYWORD in message:
        return replies.add_format_help()
    if DELETE_KEYWORD in message:
        return handle_delete(message, context)
    if ADD_KEYWORD in message:
        return handle_add(message, context)
    if CARD_KEYWORD in message:
        return handle_card(message, context)
    if ADVANCE_KEYWORD in message:
        return handle_advance_payments(message, context)
    if GREETING_KEYWORD in message.lower():
        return replies.GREETING
    return None


def handle_webhook(payload: dict[str, Any], context: BotContext) -> None:
    """Process a LINE webhook body.

    Only the first event is handled; a missing or malformed event is
    ignored. Any failure is logged and, when the event has a reply token,
    sent back to the chat with its stack trace.
    """
    events = payload.get("events")
    if not isinstance(events, list) or not events or not isinstance(events[0], dict):
        return

    event = events[0]
    reply_token = None
    message = ""

    try:
        reply_token = event.get("replyToken")
        body = event.get("message")
        text = body.get("text") if isinstance(body, dict) else None
        message = text if isinstance(text, str) else ""
        response = dispatch(message, context)
        if response is not None and reply_token:
            logger.info("Replying to message %r", message[:40])
            context.reply(reply_token, response)
    except Exception as e:
        logger.exception("Error while handling message %r", message[:40])
        if not reply_token:
            return
        try:
            context.reply(reply_token, replies.error_report(e, traceback.format_exc()))
        except Exception:
            logger.exception("Failed to send error message")
