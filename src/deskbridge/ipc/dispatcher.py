"""Command dispatcher and base handler."""

from __future__ import annotations

import asyncio
import functools
from abc import ABC, abstractmethod
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from pydantic import BaseModel

from deskbridge.infrastructure.logger import logger

T = TypeVar("T")


class CommandError(Exception):
    """Error raised by command handlers for expected failures."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class CommandResult(BaseModel):
    ok: bool
    data: Any = None
    error: str | None = None


@dataclass
class HandlerContext:
    command: str
    executor: Executor | None = None

    async def run_blocking(self, fn: Callable[..., T], *args: Any) -> T:
        """Run blocking work on the worker executor, off the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, functools.partial(fn, *args))


class CommandHandler(ABC):
    """Base class for command handlers."""

    @property
    @abstractmethod
    def command(self) -> str: ...

    @abstractmethod
    async def validate(self, args: dict[str, Any]) -> Any: ...

    @abstractmethod
    async def execute(self, payload: Any, context: HandlerContext) -> Any: ...

    async def handle(self, args: dict[str, Any], executor: Executor | None) -> Any:
        context = HandlerContext(command=self.command, executor=executor)
        validated = await self.validate(args)
        return await self.execute(validated, context)


class CommandDispatcher:
    """Routes commands to registered handlers by name.

    Every dispatch resolves to exactly one CommandResult; handler failures are
    rendered to text rather than raised.
    """

    def __init__(self, handlers: list[CommandHandler], executor: Executor | None = None) -> None:
        self._handlers: dict[str, CommandHandler] = {h.command: h for h in handlers}
        self._executor = executor

    @property
    def commands(self) -> list[str]:
        return sorted(self._handlers)

    async def dispatch(self, command: str, args: dict[str, Any] | None = None) -> CommandResult:
        handler = self._handlers.get(command)
        if not handler:
            logger.warning("Unknown command", command=command)
            return CommandResult(ok=False, error=f"Unknown command: {command}")
        try:
            data = await handler.handle(args or {}, self._executor)
        except CommandError as err:
            logger.warning(err.args[0], command=command, **err.details)
            return CommandResult(ok=False, error=err.args[0])
        except Exception as err:
            logger.exception("Command failed unexpectedly", command=command)
            return CommandResult(ok=False, error=str(err) or type(err).__name__)
        return CommandResult(ok=True, data=data)

    def submit(self, command: str, args: dict[str, Any] | None = None) -> asyncio.Task[CommandResult]:
        """Start a dispatch in the background and return its handle."""
        return asyncio.create_task(self.dispatch(command, args))
