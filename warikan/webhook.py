"""HTTP endpoint receiving LINE webhook calls."""

import logging

from flask import Flask, jsonify, request

from warikan.bot.dispatcher import BotContext, handle_webhook
from warikan.config import Settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings, context: BotContext | None = None) -> Flask:
    """Build the Flask app serving the webhook.

    Args:
        settings: Application settings.
        context: Dispatcher context. If None, one is built from settings.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    bot_context = context or BotContext(settings=settings)

    @app.get("/health")
    def health():
        return jsonify(status="ok")

    @app.post("/webhook")
    def webhook():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            logger.warning("Rejected webhook body that is not a JSON object")
            return jsonify(error="invalid JSON body"), 400

        handle_webhook(payload, bot_context)
        return jsonify(status="ok")

    return app
