"""Slash-command model, dispatcher and error taxonomy."""

from ..errors import (
    HandlerError,
    HandlerFailure,
    MalformedRequest,
    MissingCommand,
    SlashCommandError,
    UnknownCommand,
    Unauthorized,
    WebhookDeliveryFailed,
    WebhookNotConfigured,
    WebhookRejected,
)
from .command import Command
from ._dispatcher import CommandResponse, Dispatcher, HandlerFn, parse_form

__all__ = [
    "Command",
    "CommandResponse",
    "Dispatcher",
    "HandlerError",
    "HandlerFailure",
    "HandlerFn",
    "MalformedRequest",
    "MissingCommand",
    "SlashCommandError",
    "UnknownCommand",
    "Unauthorized",
    "WebhookDeliveryFailed",
    "WebhookNotConfigured",
    "WebhookRejected",
    "parse_form",
]
