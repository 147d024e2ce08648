# SPDX-License-Identifier: MIT
"""
Self-learning classifier - Command Line Interface

This CLI provides:
- slc version
- slc serve [--config PATH] [--host HOST] [--port PORT]
- slc init-db [--config PATH]
- slc state USER_ID [--config PATH]
- slc reset USER_ID [--config PATH]
"""

import argparse
import json
import logging
import sys

from . import __version__
from .core.exceptions import ConfigError, StoreError


def main(argv=None):
    argv = argv if argv is not None else sys.argv[1:]
    p = argparse.ArgumentParser(prog="slc", description="Self-learning two-class classifier")
    p.add_argument("-v", "--version", action="store_true", help="print version and exit")

    sub = p.add_subparsers(dest="cmd")
    sub.add_parser("version", help="print version")

    sp = sub.add_parser("serve", help="run the HTTP API")
    sp.add_argument("--config", help="path to config YAML file")
    sp.add_argument("--host", help="bind address (overrides config)")
    sp.add_argument("--port", type=int, help="listen port (overrides config)")

    dp = sub.add_parser("init-db", help="create the user_state table")
    dp.add_argument("--config", help="path to config YAML file")

    stp = sub.add_parser("state", help="print a user's stored snapshot as JSON")
    stp.add_argument("user_id", help="user identifier")
    stp.add_argument("--config", help="path to config YAML file")

    rp = sub.add_parser("reset", help="delete a user's stored state")
    rp.add_argument("user_id", help="user identifier")
    rp.add_argument("--config", help="path to config YAML file")

    args = p.parse_args(argv)

    if args.version or args.cmd == "version":
        print(__version__)
        return 0

    handlers = {
        "serve": handle_serve_command,
        "init-db": handle_init_db_command,
        "state": handle_state_command,
        "reset": handle_reset_command,
    }
    handler = handlers.get(args.cmd)
    if handler is None:
        p.print_help()
        return 0

    try:
        return handler(args)
    except (ConfigError, StoreError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _load(args):
    from .config.loader import load_config

    config = load_config(args.config)
    logging.basicConfig(
        level=config["logging"]["level"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return config


def _open_store(config):
    """Per-user commands need a durable store."""
    if config["store"]["backend"] != "postgres":
        raise ConfigError(
            "this command needs store.backend: postgres (or DATABASE_URL)", section="store"
        )
    from .store.postgres import PostgresStore

    store_cfg = config["store"]
    return PostgresStore.from_dsn(
        store_cfg["dsn"],
        min_size=store_cfg["min_size"],
        max_size=store_cfg["max_size"],
        connect_timeout=store_cfg["connect_timeout"],
    )


def handle_serve_command(args):
    """Handle the serve subcommand."""
    import uvicorn

    from .api.app import create_app

    config = _load(args)
    host = args.host or config["server"]["host"]
    port = args.port or config["server"]["port"]

    app = create_app(config)
    uvicorn.run(app, host=host, port=port, log_level=config["logging"]["level"].lower())
    return 0


def handle_init_db_command(args):
    """Handle the init-db subcommand."""
    store = _open_store(_load(args))
    try:
        store.ensure_schema()
    finally:
        store.close()
    print("user_state schema ready")
    return 0


def handle_state_command(args):
    """Handle the state subcommand."""
    from .state.user_service import UserService

    store = _open_store(_load(args))
    try:
        snapshot = UserService(store, args.user_id).snapshot()
    finally:
        store.close()
    print(json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False))
    return 0


def handle_reset_command(args):
    """Handle the reset subcommand."""
    from .state.user_service import UserService

    store = _open_store(_load(args))
    try:
        UserService(store, args.user_id).reset()
    finally:
        store.close()
    print(f"state for {args.user_id} deleted")
    return 0
