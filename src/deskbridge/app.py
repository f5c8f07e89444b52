"""Bridge class — composes the worker pool, handlers, dispatcher and transport."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, TextIO

from deskbridge.fs.scope import load_fs_scope
from deskbridge.fs.types import FsScope
from deskbridge.infrastructure.config import FS_SCOPE_PATH, MAX_WORKERS
from deskbridge.infrastructure.logger import logger
from deskbridge.ipc.dispatcher import CommandDispatcher, CommandResult
from deskbridge.ipc.handlers.fs_handlers import CopyDirectoryHandler
from deskbridge.ipc.transport import StdioTransport


class Bridge:
    """Backend side of the desktop shell: the table of commands the frontend may invoke."""

    def __init__(self, scope_path: Path | None = None, max_workers: int | None = None) -> None:
        self._scope_path = scope_path or FS_SCOPE_PATH
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or MAX_WORKERS,
            thread_name_prefix="deskbridge-worker",
        )
        self._dispatcher = CommandDispatcher(
            [
                CopyDirectoryHandler(scope=self._load_scope),
            ],
            executor=self._executor,
        )

    @property
    def commands(self) -> list[str]:
        return self._dispatcher.commands

    def _load_scope(self) -> FsScope | None:
        # Re-read on every call so grants made by the host apply without a restart
        return load_fs_scope(self._scope_path)

    async def invoke(self, command: str, args: dict[str, Any] | None = None) -> CommandResult:
        """Run a command in-process and wait for its result."""
        return await self._dispatcher.dispatch(command, args)

    async def serve(self, reader: asyncio.StreamReader, output: TextIO | None = None) -> None:
        """Serve JSON-lines requests from reader until EOF."""
        logger.info("Bridge serving", commands=self.commands)
        await StdioTransport(self._dispatcher, output).serve(reader)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)
        logger.debug("Bridge worker pool stopped")
