from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SlackCommanderError(Exception):
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class AuthenticationError(SlackCommanderError):
    pass


class InputError(SlackCommanderError):
    pass


class UnterminatedQuote(InputError):
    pass


class HandlerError(SlackCommanderError):
    pass


class DeliveryError(SlackCommanderError):
    pass


class ConfigurationError(SlackCommanderError):
    pass


class SlackApiError(SlackCommanderError):
    pass


def error_message(err: BaseException) -> str:
    message = getattr(err, "message", None)
    return message if isinstance(message, str) else str(err)
