"""Failure taxonomy for a single slash-command request.

Every error is terminal for its request.  ``status`` is the HTTP status the
transport should answer with and ``message`` is the plain-text body.
"""

from __future__ import annotations


class SlashCommandError(Exception):
    status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MalformedRequest(SlashCommandError):
    status = 400

    def __init__(self, detail: str = "") -> None:
        super().__init__("Invalid request body")
        self.detail = detail


class MissingCommand(SlashCommandError):
    status = 400

    def __init__(self) -> None:
        super().__init__("command required")


class UnknownCommand(SlashCommandError):
    status = 400

    def __init__(self, name: str) -> None:
        super().__init__("Invalid command")
        self.name = name


class Unauthorized(SlashCommandError):
    status = 401

    def __init__(self, name: str, token: str) -> None:
        super().__init__(f'Invalid token "{token}" for command "{name}"')
        self.name = name
        self.token = token


class HandlerFailure(SlashCommandError):
    status = 500


class WebhookNotConfigured(SlashCommandError):
    status = 500

    def __init__(self) -> None:
        super().__init__("no webhook url specified to post command publicly")


class WebhookDeliveryFailed(SlashCommandError):
    status = 500

    def __init__(self, detail: str) -> None:
        super().__init__(f"error sending public message: {detail}")
        self.detail = detail


class WebhookRejected(SlashCommandError):
    status = 500

    def __init__(self, remote_status: int, remote_body: str) -> None:
        super().__init__(f"slack rejected public message with {remote_body}")
        self.remote_status = remote_status
        self.remote_body = remote_body


class HandlerError(Exception):
    """Raised by a command handler to fail the request with *message*."""
