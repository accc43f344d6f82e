"""
Task List CLI
=============
Entry point for running the task service.

Usage:
    # Serve on the default address (127.0.0.1:8080), front-end from ./web
    python -m tasklist.cli serve

    # Custom address and static directory
    python -m tasklist.cli serve --addr :9000 --web ./frontend

    # Show the HTTP surface and the filter/sort names
    python -m tasklist.cli routes
"""

from __future__ import annotations

import argparse
import sys

from tasklist import policy
from tasklist.config import ServerConfig, parse_addr
from tasklist.logging_setup import setup_logging
from tasklist.server import TASK_PATH, run_server


# ─────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────

def build_config(args) -> ServerConfig:
    """Environment first, then any flags given on the command line."""
    config = ServerConfig.from_env()
    if getattr(args, "addr", None):
        config.host, config.port = parse_addr(args.addr)
    if getattr(args, "web", None):
        config.web_dir = args.web
    if getattr(args, "log_level", None):
        config.log_level = args.log_level.upper()
    if getattr(args, "no_cors", False):
        config.cors = False
    return config


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

def cmd_serve(args):
    """Run the task server until interrupted."""
    config = build_config(args)
    setup_logging(config.log_level)
    run_server(config)


def cmd_routes(args):
    """Print the task resource routes and query options."""
    print(f"  GET    {TASK_PATH}            list tasks")
    print(f"  GET    {TASK_PATH}<id>        read one task")
    print(f"  POST   {TASK_PATH}            create   {{\"title\": ...}}")
    print(f"  PUT    {TASK_PATH}<id>        replace  (full task JSON)")
    print(f"  DELETE {TASK_PATH}<id>        delete")
    print()
    print(f"  filter: {', '.join(policy.list_filters())}")
    print(f"  sortBy: {', '.join(policy.list_sorters())}")


# ─────────────────────────────────────────────────────────────
#  Main
# ─────────────────────────────────────────────────────────────

def _addr(value: str) -> str:
    try:
        parse_addr(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasklist",
        description="In-memory to-do list served over HTTP/JSON",
    )
    subparsers = parser.add_subparsers(dest="command")

    # serve
    p_serve = subparsers.add_parser("serve", help="Run the HTTP server")
    p_serve.add_argument("--addr", type=_addr,
                         help="address:port on which the server will be listening "
                              "(default: 127.0.0.1:8080)")
    p_serve.add_argument("--web", help="Static front-end directory (default: web)")
    p_serve.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    p_serve.add_argument("--no-cors", action="store_true", help="Don't send CORS headers")

    # routes
    subparsers.add_parser("routes", help="Show the HTTP routes and query options")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "serve": cmd_serve,
        "routes": cmd_routes,
    }

    if args.command in commands:
        commands[args.command](args)
    else:
        parser.print_help()
        sys.exit(2)


if __name__ == "__main__":
    main()
