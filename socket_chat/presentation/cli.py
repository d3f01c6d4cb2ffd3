"""Console front end.

A minimal display collaborator: prints every event as it is appended and
maps typed commands onto the connection manager's operations. Anything that
is not a command is sent as a message.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import threading
from typing import Callable, Optional, Sequence, TextIO

from ..config_loader import load_client_config
from ..const import DEFAULT_NAME, DEFAULT_SERVER_HOST, DEFAULT_SERVER_PORT
from ..domain.exceptions import ChatClientError, ConfigurationError
from ..domain.value_objects import Event, Mode
from ..infrastructure.server import CapitalizeServer
from ..infrastructure.transport import ConnectionManager
from .container import create_container

_LOGGER = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  /connect            connect (or retry now)
  /disconnect         close the connection
  /mode simulated|live
  /url <url>          server URL for the next connect
  /clear              clear the message log
  /status             show connection state
  /quit               exit
Anything else is sent as a message."""

_PREFIXES = {"sent": ">>", "received": "<<", "system": "--"}


def format_event(event: Event) -> str:
    """Render an event as one console line."""
    time_text = event.timestamp.astimezone().strftime("%H:%M:%S")
    return f"[{time_text}] {_PREFIXES[event.kind.value]} {event.content}"


def format_status(manager: ConnectionManager) -> str:
    """Render the manager's read-only state as one line."""
    status = (
        f"{manager.state.label} ({manager.mode.value}, {manager.server_url}), "
        f"retry {manager.retry_count}/{manager.max_retries}"
    )
    if manager.error_message:
        status += f", error: {manager.error_message}"
    return status


def handle_command(
    manager: ConnectionManager,
    line: str,
    output: Callable[[str], None] = print,
) -> bool:
    """Execute one line of user input.

    Args:
        manager: Connection manager to drive
        line: Raw input line
        output: Function printing feedback

    Returns:
        False when the user asked to quit, True otherwise
    """
    command, _, argument = line.strip().partition(" ")
    argument = argument.strip()

    if command in ("/quit", "/exit"):
        return False
    if command == "/help":
        output(HELP_TEXT)
    elif command == "/connect":
        manager.connect()
    elif command == "/disconnect":
        manager.disconnect()
    elif command == "/clear":
        manager.clear_log()
    elif command == "/status":
        output(format_status(manager))
    elif command == "/mode":
        try:
            manager.set_mode(Mode(argument.lower()))
        except ValueError:
            output("Usage: /mode simulated|live")
    elif command == "/url":
        try:
            manager.set_url(argument)
        except ValueError as err:
            output(str(err))
    else:
        try:
            manager.send(line)
        except ChatClientError as err:
            output(f"!! {err}")
    return True


def start_line_reader(
    stream: TextIO, loop: asyncio.AbstractEventLoop
) -> "asyncio.Queue[str]":
    """Read lines from a blocking stream on a daemon thread.

    A daemon thread never holds up interpreter exit, so Ctrl+C ends the
    client while it waits for input. End of input is delivered as "".

    Returns:
        Queue receiving each line, then "" once the stream is exhausted
    """
    lines: "asyncio.Queue[str]" = asyncio.Queue()

    def read() -> None:
        while True:
            line = stream.readline()
            try:
                loop.call_soon_threadsafe(lines.put_nowait, line)
            except RuntimeError:
                # Event loop already closed
                return
            if not line:
                return

    threading.Thread(target=read, name="stdin-reader", daemon=True).start()
    return lines


async def run_client(config, stream: TextIO = sys.stdin) -> None:
    """Run the interactive client until EOF or /quit."""
    container = create_container(config)
    manager = container.connection_manager
    unsubscribe = container.event_log.subscribe(lambda event: print(format_event(event)))
    lines = start_line_reader(stream, asyncio.get_running_loop())

    print(f"{DEFAULT_NAME} ({manager.mode.value} mode). Type /help for commands.")
    manager.connect()
    try:
        while True:
            line = await lines.get()
            if not line:
                break
            line = line.rstrip("\n")
            if not line:
                continue
            if not handle_command(manager, line):
                break
    finally:
        unsubscribe()
        container.shutdown()


async def run_server(host: str, port: int) -> None:
    """Run the capitalizing server until cancelled."""
    server = CapitalizeServer(host, port)
    try:
        await server.serve_forever()
    finally:
        await server.stop()


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(prog="socket-chat", description=DEFAULT_NAME)
    subparsers = parser.add_subparsers(dest="command", required=True)

    client = subparsers.add_parser("client", help="interactive chat client")
    client.add_argument("--config", help="YAML configuration file")
    client.add_argument("--url", dest="server_url", help="server URL")
    client.add_argument("--mode", choices=[m.value for m in Mode])
    client.add_argument("--max-retries", type=int)
    client.add_argument("--connect-timeout-ms", type=int)
    client.add_argument("--backoff-base-ms", type=int)
    client.add_argument("--log-level")

    server = subparsers.add_parser("serve", help="run the capitalizing server")
    server.add_argument("--host", default=DEFAULT_SERVER_HOST)
    server.add_argument("--port", type=int, default=DEFAULT_SERVER_PORT)
    server.add_argument("--log-level", default="INFO")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Console entry point."""
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        logging.basicConfig(level=args.log_level.upper())
        try:
            asyncio.run(run_server(args.host, args.port))
        except KeyboardInterrupt:
            pass
        return 0

    try:
        config = load_client_config(
            args.config,
            overrides={
                "server_url": args.server_url,
                "mode": args.mode,
                "max_retries": args.max_retries,
                "connect_timeout_ms": args.connect_timeout_ms,
                "backoff_base_ms": args.backoff_base_ms,
                "log_level": args.log_level,
            },
        )
    except ConfigurationError as err:
        print(f"error: {err}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(run_client(config))
    except KeyboardInterrupt:
        pass
    return 0
