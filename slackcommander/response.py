from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .errors import error_message

logger = logging.getLogger(__name__)

ERROR_PREFIX = "something went wrong - "
EMPTY_RESULT_TEXT = "command produced no response"


@dataclass(frozen=True)
class Attachment:
    text: str

    def to_payload(self) -> dict[str, Any]:
        return {"text": self.text}


@dataclass(frozen=True)
class CommandResponse:
    text: str | None = None
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)
    markdown: bool = False
    response_type: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.text is not None:
            payload["text"] = self.text
        if self.attachments:
            payload["attachments"] = [a.to_payload() for a in self.attachments]
            payload["markdown"] = self.markdown
        if self.response_type:
            payload["response_type"] = self.response_type
        return payload


def simple_text_response(text: str) -> CommandResponse:
    return CommandResponse(attachments=(Attachment(text=text),))


def error_response(err: BaseException) -> CommandResponse:
    return simple_text_response(ERROR_PREFIX + error_message(err))


def format_result(result: CommandResponse | str | None, err: BaseException | None = None) -> CommandResponse:
    """Turn a handler outcome into exactly one CommandResponse.

    Plain strings use the legacy `{"text": ...}` shape. A missing result with
    no error means the handler broke its contract; a placeholder is returned
    and the event is logged.
    """
    if err is not None:
        return error_response(err)
    if isinstance(result, CommandResponse):
        if result.text or result.attachments:
            return result
    elif isinstance(result, str) and result:
        return CommandResponse(text=result)
    logger.warning("command handler returned neither a result nor an error")
    return simple_text_response(EMPTY_RESULT_TEXT)
