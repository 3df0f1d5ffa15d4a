from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Union

if TYPE_CHECKING:
    from .dispatcher import CommandArgs
    from .response import CommandResponse

HandlerResult = Union["CommandResponse", str, None]
CommandHandler = Callable[["CommandArgs"], HandlerResult]


class ExecutionMode(str, Enum):
    SYNC = "sync"
    ASYNC = "async"


@dataclass(frozen=True)
class CommandDef:
    handler: CommandHandler
    no_response: bool = False
    mode: ExecutionMode = ExecutionMode.SYNC

    @property
    def is_async(self) -> bool:
        return self.mode is ExecutionMode.ASYNC


class CommandRegistry:
    """Name -> CommandDef mapping with an optional fallback definition.

    Every read and write happens under one lock; handlers are never called
    while it is held.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._commands: dict[str, CommandDef] = {}
        self._default: CommandDef | None = None

    def register(self, name: str, definition: CommandDef) -> None:
        with self._lock:
            self._commands[name] = definition

    def register_default(self, definition: CommandDef) -> None:
        with self._lock:
            self._default = definition

    def clear(self) -> None:
        with self._lock:
            self._commands.clear()
            self._default = None

    def resolve(self, name: str) -> CommandDef | None:
        with self._lock:
            return self._commands.get(name)

    def default(self) -> CommandDef | None:
        with self._lock:
            return self._default

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._commands)
