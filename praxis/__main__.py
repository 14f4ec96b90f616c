"""
praxis.__main__ -- CLI entry point.

Usage:
    praxis serve [--config PATH] [--catalog PATH] [--transport stdio|sse|streamable-http]
    praxis list [--catalog PATH] [--kind all|primitives|scripts]
    praxis lookup-effect GOAL [--actor SYM] [--catalog PATH]
    praxis lookup-signature SIGNATURE [--catalog PATH]
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="praxis",
        description="Praxis -- action knowledge base for goal-directed agents",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # -- serve -------------------------------------------------------------
    serve_p = sub.add_parser("serve", help="Start the MCP server")
    serve_p.add_argument("--config", default=None, help="Path to praxis.yaml config")
    serve_p.add_argument("--catalog", default=None, help="Path to an action catalog")
    serve_p.add_argument(
        "--transport",
        default="stdio",
        choices=["stdio", "sse", "streamable-http"],
        help="MCP transport (default: stdio)",
    )

    # -- list --------------------------------------------------------------
    list_p = sub.add_parser("list", help="List loaded actions")
    list_p.add_argument("--config", default=None, help="Path to praxis.yaml config")
    list_p.add_argument("--catalog", default=None, help="Path to an action catalog")
    list_p.add_argument(
        "--kind", default="all", choices=["all", "primitives", "scripts"]
    )

    # -- lookup-effect -----------------------------------------------------
    effect_p = sub.add_parser("lookup-effect", help="Find actions achieving a goal")
    effect_p.add_argument("goal", help='Goal state, e.g. "holding(robot1, cup1)"')
    effect_p.add_argument("--actor", default="", help="Actor that must perform it")
    effect_p.add_argument("--config", default=None, help="Path to praxis.yaml config")
    effect_p.add_argument("--catalog", default=None, help="Path to an action catalog")

    # -- lookup-signature --------------------------------------------------
    sig_p = sub.add_parser("lookup-signature", help="Find actions callable as a signature")
    sig_p.add_argument("signature", help='Call shape, e.g. "pickUp(robot1, cup1)"')
    sig_p.add_argument("--config", default=None, help="Path to praxis.yaml config")
    sig_p.add_argument("--catalog", default=None, help="Path to an action catalog")

    args = parser.parse_args(argv)

    # -- Logging -----------------------------------------------------------
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help()
        return

    # -- Dispatch ----------------------------------------------------------
    if args.command == "serve":
        _cmd_serve(args)
    elif args.command == "list":
        _cmd_list(args)
    elif args.command == "lookup-effect":
        _cmd_lookup_effect(args)
    elif args.command == "lookup-signature":
        _cmd_lookup_signature(args)
    else:
        parser.print_help()


# ---------------------------------------------------------------------------
# Command implementations
# ---------------------------------------------------------------------------


def _open(args: argparse.Namespace):
    from praxis.core.config import Config
    from praxis.system import open_database

    config = Config.from_yaml(args.config) if args.config else Config()
    if args.catalog:
        config = dataclasses.replace(config, catalog_path=args.catalog)
    # follow the CLI's own verbosity rather than the config default
    config.log_level = "DEBUG" if args.verbose else "WARNING"
    return open_database(config)


def _cmd_serve(args: argparse.Namespace) -> None:
    """Start the MCP server."""
    from praxis.server import run_server

    run_server(
        config_path=args.config,
        catalog_path=args.catalog,
        transport=args.transport,
    )


def _cmd_list(args: argparse.Namespace) -> None:
    """Print a snapshot of the loaded actions."""
    from praxis.actions.entry import entries_to_dicts

    db = _open(args)
    if args.kind == "primitives":
        entries = db.get_primitives()
    elif args.kind == "scripts":
        entries = db.get_scripts()
    else:
        entries = db.get_all_actions()
    print(json.dumps(entries_to_dicts(entries), indent=2))


def _cmd_lookup_effect(args: argparse.Namespace) -> None:
    """Print the actions whose postconditions achieve GOAL."""
    from praxis.fol.parser import parse_predicate, parse_term

    db = _open(args)
    actor = parse_term(args.actor) if args.actor else None
    entries = db.get_actions_by_effect(actor, parse_predicate(args.goal))
    if entries:
        print(json.dumps([e.to_dict() for e in entries], indent=2))
    else:
        print("No actions found.")


def _cmd_lookup_signature(args: argparse.Namespace) -> None:
    """Print the actions callable as SIGNATURE."""
    from praxis.fol.parser import parse_predicate

    db = _open(args)
    entries = db.get_actions_by_signature(parse_predicate(args.signature))
    if entries:
        print(json.dumps([e.to_dict() for e in entries], indent=2))
    else:
        print("No actions found.")


if __name__ == "__main__":
    main()
