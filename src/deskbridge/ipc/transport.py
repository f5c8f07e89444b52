"""JSON-lines command transport between the frontend and the dispatcher."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, TextIO

from deskbridge.infrastructure.logger import logger
from deskbridge.ipc.dispatcher import CommandDispatcher, CommandResult

MAX_LINE_BYTES = 1024 * 1024


async def open_stdin_reader() -> asyncio.StreamReader:
    """Wrap stdin in an asyncio StreamReader."""
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=MAX_LINE_BYTES)
    await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
    return reader


class StdioTransport:
    """Reads one request per line and writes one response per line.

    Request:  {"id": ..., "cmd": "copy_directory", "args": {...}}
    Response: {"id": ..., "ok": true, "data": ...} or {"id": ..., "ok": false, "error": "..."}

    Requests run concurrently, so responses can come back out of order; callers
    correlate them by id.
    """

    def __init__(self, dispatcher: CommandDispatcher, output: TextIO | None = None) -> None:
        self._dispatcher = dispatcher
        self._output = output or sys.stdout
        self._write_lock = asyncio.Lock()

    async def serve(self, reader: asyncio.StreamReader) -> None:
        """Process requests until EOF, then wait for in-flight ones to finish."""
        pending: set[asyncio.Task[None]] = set()
        while True:
            try:
                line = await reader.readline()
            except ValueError as err:
                # readline drops the oversized chunk, so the stream stays usable
                logger.warning("Request line rejected", error=str(err))
                await self._respond(None, CommandResult(ok=False, error=f"Invalid request: {err}"))
                continue
            if not line:
                break
            if not line.strip():
                continue
            task = asyncio.create_task(self._handle_line(line))
            pending.add(task)
            task.add_done_callback(pending.discard)

        if pending:
            await asyncio.gather(*pending)
        logger.debug("Transport reached EOF")

    async def _handle_line(self, line: bytes) -> None:
        try:
            request = json.loads(line)
        except ValueError as err:
            await self._respond(None, CommandResult(ok=False, error=f"Invalid request: {err}"))
            return

        if not isinstance(request, dict):
            await self._respond(None, CommandResult(ok=False, error="Invalid request: expected a JSON object"))
            return

        request_id = request.get("id")
        command = request.get("cmd")
        args = request.get("args") or {}
        if not isinstance(command, str) or not isinstance(args, dict):
            await self._respond(
                request_id,
                CommandResult(ok=False, error="Invalid request: 'cmd' must be a string and 'args' an object"),
            )
            return

        result = await self._dispatcher.dispatch(command, args)
        await self._respond(request_id, result)

    async def _respond(self, request_id: Any, result: CommandResult) -> None:
        payload: dict[str, Any] = {"id": request_id, "ok": result.ok}
        if result.ok:
            payload["data"] = result.data
        else:
            payload["error"] = result.error
        async with self._write_lock:
            self._output.write(json.dumps(payload) + "\n")
            self._output.flush()
