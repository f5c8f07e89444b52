"""Entry point: python -m deskbridge"""

from __future__ import annotations

import argparse
import asyncio
import signal
import sys

from deskbridge.infrastructure.logger import logger


async def main() -> None:
    from deskbridge.app import Bridge
    from deskbridge.ipc.transport import open_stdin_reader

    bridge = Bridge()

    # Handle graceful shutdown
    shutdown_event = asyncio.Event()

    def signal_handler() -> None:
        logger.info("Received shutdown signal")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        reader = await open_stdin_reader()
        serve_task = asyncio.create_task(bridge.serve(reader))
        stop_task = asyncio.create_task(shutdown_event.wait())
        await asyncio.wait({serve_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        if serve_task.done() and not serve_task.cancelled() and serve_task.exception() is not None:
            logger.error("Transport stopped unexpectedly", exc_info=serve_task.exception())
        for task in (serve_task, stop_task):
            task.cancel()
    finally:
        bridge.shutdown()


async def copy_once(source: str, destination: str) -> int:
    """Run a single copy_directory command. Returns the process exit code."""
    from deskbridge.app import Bridge

    bridge = Bridge()
    try:
        result = await bridge.invoke("copy_directory", {"source": source, "destination": destination})
    finally:
        bridge.shutdown()

    if not result.ok:
        print(result.error, file=sys.stderr)
        return 1
    return 0


def run() -> None:
    parser = argparse.ArgumentParser(prog="deskbridge", description="Desktop shell command bridge")
    subparsers = parser.add_subparsers(dest="subcommand")
    subparsers.add_parser("serve", help="Serve JSON-lines commands on stdin/stdout (default)")
    copy_parser = subparsers.add_parser("copy", help="Copy the contents of SOURCE into DESTINATION")
    copy_parser.add_argument("source")
    copy_parser.add_argument("destination")
    args = parser.parse_args()

    if args.subcommand == "copy":
        sys.exit(asyncio.run(copy_once(args.source, args.destination)))

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
