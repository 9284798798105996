#!/usr/bin/env python3
"""
NUI Logger CLI

Runs the logging server and offers a few direct views of the log directory
for when a browser is not at hand.

Commands:

1) serve
   - Start the HTTP server (POST /log, GET /logs, POST /clear, viewer).

2) servers
   - List server directories under the log root.

3) resources [--server S]
   - List resources that have a log file.

4) tail [--server S] RESOURCE [--limit N]
   - Print the most recent records of one resource, oldest first.

5) clear [--server S] RESOURCE
   - Truncate one resource's log.

Configuration comes from the same NUI_LOGGER_* environment variables (or
.env) the server uses; --log-dir overrides the storage root for the offline
commands.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from configs.settings import settings
from runtime.store.log_store import LogStore


BANNER = """
╔══════════════════════════════════════════════╗
║        🎮 NUI Interceptor Logger Server       ║
╚══════════════════════════════════════════════╝
"""


def _build_store(log_dir: str) -> LogStore:
    return LogStore(
        log_dir=log_dir,
        flat=settings.flat_storage,
        default_limit=settings.tail_limit,
    )


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


def cmd_serve(host: str, port: int) -> None:
    """Print the banner and run the server under uvicorn until interrupted."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from runtime.api.server import create_app

    app = create_app(settings)

    print(BANNER)
    print(f"✅ Server running on http://{host}:{port}")
    print(f"📁 Logging to directory: {settings.log_dir}")
    print("\nEndpoints:")
    print("  POST /log              - Receive NUI intercepts (body: { server?, resource, ... })")
    print("  GET  /logs             - List servers (PIN)")
    print("  GET  /logs?server=<s>  - List resources of a server (PIN)")
    print("  GET  /logs?server=<s>&resource=<r> - Last logs for a resource (PIN)")
    print("  POST /clear            - Clear logs for a resource (PIN)")
    print("  GET  /view             - Browser viewer (PIN)")
    print("  GET  /health           - Health check\n")
    print("📡 Waiting for NUI data...\n")

    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())
    print("\n👋 Shut down.")


# ---------------------------------------------------------------------------
# Offline views of the log directory
# ---------------------------------------------------------------------------


def cmd_servers(log_dir: str) -> None:
    store = _build_store(log_dir)
    for name in store.list_servers():
        print(name)


def cmd_resources(log_dir: str, server: str | None) -> None:
    store = _build_store(log_dir)
    for name in store.list_resources(server):
        print(name)


def cmd_tail(log_dir: str, server: str | None, resource: str, limit: int | None) -> None:
    """Print one JSON record per line, oldest first."""
    store = _build_store(log_dir)
    for record in store.tail(store.key(server, resource), limit=limit):
        print(json.dumps(record, ensure_ascii=False))


def cmd_clear(log_dir: str, server: str | None, resource: str) -> int:
    store = _build_store(log_dir)
    key = store.key(server, resource)
    if store.clear(key):
        print(f"🗑️ Logs cleared for {key.resource}")
        return 0
    print(f"No logs found for {key.resource}", file=sys.stderr)
    return 1


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="NUI Logger CLI")

    # Shared by the commands that read the log directory directly.
    store_opts = argparse.ArgumentParser(add_help=False)
    store_opts.add_argument(
        "--log-dir",
        default=str(settings.log_dir),
        help="Log root directory (default: NUI_LOGGER_LOG_DIR or './logs')",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = subparsers.add_parser("serve", help="Start the HTTP server")
    p_serve.add_argument("--host", default=settings.host, help="Bind address")
    p_serve.add_argument("--port", type=int, default=settings.port, help="Listening port")

    # servers
    subparsers.add_parser("servers", parents=[store_opts], help="List servers that have logs")

    # resources
    p_resources = subparsers.add_parser("resources", parents=[store_opts], help="List resources that have logs")
    p_resources.add_argument("--server", default=None, help="Server name")

    # tail
    p_tail = subparsers.add_parser("tail", parents=[store_opts], help="Print the latest records of a resource")
    p_tail.add_argument("resource", help="Resource name")
    p_tail.add_argument("--server", default=None, help="Server name")
    p_tail.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of records (default: NUI_LOGGER_TAIL_LIMIT or 200)",
    )

    # clear
    p_clear = subparsers.add_parser("clear", parents=[store_opts], help="Truncate a resource's log")
    p_clear.add_argument("resource", help="Resource name")
    p_clear.add_argument("--server", default=None, help="Server name")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    command: str = args.command
    log_dir: str = getattr(args, "log_dir", str(settings.log_dir))

    if command == "serve":
        cmd_serve(host=args.host, port=args.port)
    elif command == "servers":
        cmd_servers(log_dir=log_dir)
    elif command == "resources":
        cmd_resources(log_dir=log_dir, server=args.server)
    elif command == "tail":
        cmd_tail(log_dir=log_dir, server=args.server, resource=args.resource, limit=args.limit)
    elif command == "clear":
        return cmd_clear(log_dir=log_dir, server=args.server, resource=args.resource)
    else:
        parser.error(f"Unknown command: {command}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
