"""Filesystem command handlers: copy_directory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from deskbridge.fs.copier import copy_directory
from deskbridge.fs.errors import CopyError
from deskbridge.fs.scope import check_access
from deskbridge.fs.types import FsScope
from deskbridge.infrastructure.logger import logger
from deskbridge.ipc.dispatcher import CommandError, CommandHandler, HandlerContext


@dataclass
class CopyDirectoryPayload:
    source: str
    destination: str


class CopyDirectoryHandler(CommandHandler):
    command = "copy_directory"

    def __init__(self, scope: Callable[[], FsScope | None] | None = None) -> None:
        self._scope = scope or (lambda: None)

    async def validate(self, args: dict[str, Any]) -> CopyDirectoryPayload:
        source = args.get("source")
        destination = args.get("destination")
        if not isinstance(source, str) or not isinstance(destination, str) or not source or not destination:
            raise CommandError("Missing required fields", {"fields": ["source", "destination"]})
        return CopyDirectoryPayload(source=source, destination=destination)

    def _check_scope(self, payload: CopyDirectoryPayload) -> None:
        scope = self._scope()
        if not check_access(payload.source, scope, write=False):
            raise CommandError(f"Read access denied by filesystem scope: {payload.source}", {"source": payload.source})
        if not check_access(payload.destination, scope, write=True):
            raise CommandError(
                f"Write access denied by filesystem scope: {payload.destination}",
                {"destination": payload.destination},
            )

    async def execute(self, payload: CopyDirectoryPayload, context: HandlerContext) -> None:
        await context.run_blocking(self._check_scope, payload)

        try:
            copied = await context.run_blocking(copy_directory, payload.source, payload.destination)
        except CopyError as err:
            raise CommandError(
                str(err),
                {"kind": err.kind, "source": payload.source, "destination": payload.destination},
            ) from err

        logger.info("Directory copied", source=payload.source, destination=payload.destination, bytes=copied)
        return None
