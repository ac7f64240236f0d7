"""External service integrations."""

from .webhook import WebhookClient

__all__ = ["WebhookClient"]
