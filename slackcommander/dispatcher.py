from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Mapping

from .args import parse_args, strip_formatting
from .config import MuxConfig
from .delivery import Delivery
from .errors import ConfigurationError, DeliveryError, HandlerError, UnterminatedQuote, error_message
from .registry import CommandDef, CommandHandler, CommandRegistry, ExecutionMode, HandlerResult
from .response import CommandResponse, format_result
from .slack_api import SlackService

logger = logging.getLogger(__name__)

TOKEN_INVALID_TEXT = "Token invalid, contact an admin"
NO_COMMAND_TEXT = "Provide a command"
ACK_TEXT = "Command received, wait for it..."


def _published(ok: bool) -> Future[bool]:
    fut: Future[bool] = Future()
    fut.set_result(ok)
    return fut


@dataclass(frozen=True)
class CommandArgs:
    user: str
    command: str
    args: list[str]
    text: str = ""
    user_id: str = ""
    channel_id: str = ""
    response_url: str = ""


@dataclass(frozen=True)
class DispatchResult:
    """What the HTTP layer writes back, plus the completion signal.

    `outcome` resolves once: immediately for synchronous and rejected
    requests, after the delivery attempt for asynchronous ones. It is None
    for commands registered with `no_response`.
    """

    status_code: int
    body: str
    outcome: Future[bool] | None
    payload: dict[str, Any] | None = None
    rejected: bool = False


class SlackMux:
    def __init__(
        self,
        *,
        token: str,
        ignore_formatting: bool = False,
        delivery: Delivery | None = None,
        registry: CommandRegistry | None = None,
        slack: SlackService | None = None,
    ) -> None:
        if not token:
            raise ConfigurationError(code="TOKEN_MISSING", message="token is missing, set it before serving")
        self.token = token
        self.ignore_formatting = ignore_formatting
        self.delivery = delivery or Delivery()
        self.registry = registry or CommandRegistry()
        self.slack = slack

    @classmethod
    def from_config(cls, cfg: MuxConfig) -> SlackMux:
        return cls(
            token=cfg.token,
            ignore_formatting=cfg.ignore_formatting,
            delivery=Delivery(dry_run=cfg.dry_run, timeout_seconds=cfg.delivery_timeout_seconds),
            slack=SlackService(token=cfg.slack_api_token) if cfg.slack_api_token else None,
        )

    def register_command(
        self,
        name: str,
        handler: CommandHandler,
        *,
        mode: ExecutionMode = ExecutionMode.SYNC,
        no_response: bool = False,
    ) -> None:
        self.registry.register(name, CommandDef(handler=handler, no_response=no_response, mode=mode))

    def register_default(
        self,
        handler: CommandHandler,
        *,
        mode: ExecutionMode = ExecutionMode.SYNC,
        no_response: bool = False,
    ) -> None:
        self.registry.register_default(CommandDef(handler=handler, no_response=no_response, mode=mode))

    def clear(self) -> None:
        self.registry.clear()

    def registered_commands(self) -> list[str]:
        return self.registry.names()

    def dispatch(self, form: Mapping[str, str]) -> DispatchResult:
        if form.get("token") != self.token:
            logger.info("rejected request with invalid token (user=%s)", form.get("user_name"))
            return DispatchResult(status_code=400, body=TOKEN_INVALID_TEXT, outcome=_published(False))

        text = (form.get("text") or "").strip()
        if self.ignore_formatting:
            text = strip_formatting(text).strip()
        try:
            args = parse_args(text)
        except UnterminatedQuote as e:
            return DispatchResult(status_code=400, body=e.message, outcome=_published(False))

        default = self.registry.default()
        if not text and default is None:
            return DispatchResult(status_code=400, body=NO_COMMAND_TEXT, outcome=_published(False))

        name = args[0] if args else ""
        definition = self.registry.resolve(name)
        if definition is None:
            if default is None:
                return DispatchResult(
                    status_code=200,
                    body=f"{name} is not a valid command.",
                    outcome=_published(True),
                    rejected=True,
                )
            definition = default

        ctx = CommandArgs(
            user=form.get("user_name") or "",
            command=name,
            args=args,
            text=text,
            user_id=form.get("user_id") or "",
            channel_id=form.get("channel_id") or "",
            response_url=form.get("response_url") or "",
        )
        if not definition.is_async:
            return self._run_sync(definition, ctx)

        outcome: Future[bool] | None = None if definition.no_response else Future()
        worker = threading.Thread(
            target=self._run_async,
            args=(definition, ctx, outcome),
            name=f"slackcommander-{name or 'default'}",
            daemon=False,
        )
        worker.start()
        return DispatchResult(status_code=200, body=ACK_TEXT, outcome=outcome)

    def _invoke(self, definition: CommandDef, ctx: CommandArgs) -> HandlerResult:
        try:
            return definition.handler(ctx)
        except (HandlerError, KeyboardInterrupt):
            raise
        except BaseException as e:
            raise HandlerError(code="HANDLER_FAILED", message=error_message(e) or type(e).__name__) from e

    def _run_sync(self, definition: CommandDef, ctx: CommandArgs) -> DispatchResult:
        try:
            result = self._invoke(definition, ctx)
        except HandlerError as e:
            logger.info("command %r failed: %s", ctx.command, e.message)
            return DispatchResult(status_code=400, body=e.message, outcome=_published(True))
        if isinstance(result, CommandResponse):
            return DispatchResult(status_code=200, body="", outcome=_published(True), payload=result.to_payload())
        return DispatchResult(status_code=200, body=result or "", outcome=_published(True))

    def _run_async(self, definition: CommandDef, ctx: CommandArgs, outcome: Future[bool] | None) -> None:
        ok = False
        try:
            ok = self._execute_and_deliver(definition, ctx)
        finally:
            if outcome is not None:
                outcome.set_result(ok)

    def _execute_and_deliver(self, definition: CommandDef, ctx: CommandArgs) -> bool:
        err: HandlerError | None = None
        result: HandlerResult = None
        try:
            result = self._invoke(definition, ctx)
        except HandlerError as e:
            err = e

        if definition.no_response:
            # TODO: route these to an error sink instead of the log once one exists
            if err is not None:
                logger.warning("command %r (no response) failed: %s", ctx.command, err.message)
            return True

        try:
            self.delivery.deliver(format_result(result, err), ctx.response_url)
        except DeliveryError as e:
            logger.warning("delivery for command %r failed: %s", ctx.command, e.message)
            return False
        except Exception:
            logger.exception("unexpected failure delivering command %r", ctx.command)
            return False
        return True
