"""Incoming-webhook client used for public command responses."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from ..errors import WebhookDeliveryFailed, WebhookRejected

logger = logging.getLogger(__name__)


class WebhookClient:
    """Posts ``{"text", "channel"}`` messages to a chat webhook URL.

    A message counts as delivered only when the webhook answers exactly
    ``200``.  Transport errors and timeouts raise
    :class:`WebhookDeliveryFailed`; any other status raises
    :class:`WebhookRejected` with the remote body.
    """

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self.url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def post_message(self, text: str, channel: str) -> None:
        payload = {"text": text, "channel": channel}
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(self.url, json=payload) as resp:
                    if resp.status == 200:
                        logger.debug("Webhook accepted message for %s", channel)
                        return
                    body = await resp.text(errors="replace")
        except asyncio.TimeoutError:
            raise WebhookDeliveryFailed(
                f"timed out after {self._timeout.total:g}s"
            ) from None
        except aiohttp.ClientError as exc:
            raise WebhookDeliveryFailed(str(exc) or type(exc).__name__) from exc

        logger.warning("Webhook rejected message for %s: %s %s", channel, resp.status, body[:200])
        raise WebhookRejected(resp.status, body)
