#!/usr/bin/env python3
"""
Page Context CLI

Preview the instructions a URL resolves to while authoring an
instruction tree.

Usage:
    python -m page_context resolve URL [--format] [--mode single]
    python -m page_context sets

Examples:
    python -m page_context resolve https://app.example.com/projects/42
    python -m page_context resolve /settings/profile --mode single --format
    python -m page_context sets --instructions-dir ./instructions
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .settings import ResolverMode, ResolverSettings, build_resolver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="page_context",
        description="Resolve page context instructions for URLs",
    )
    parser.add_argument("--root", help="Plugin root containing instructions/")
    parser.add_argument("--instructions-dir", help="Instructions directory (overrides --root)")
    parser.add_argument(
        "--mode", choices=[m.value for m in ResolverMode],
        help="multi: match instruction sets by domain; single: one tree for all URLs"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser("resolve", help="Print the context for a URL")
    resolve_parser.add_argument("url")
    resolve_parser.add_argument("--format", action="store_true", help="Wrap in the prompt envelope")

    subparsers.add_parser("sets", help="List instruction sets and their domains")
    return parser


def settings_from_args(args: argparse.Namespace) -> ResolverSettings:
    settings = ResolverSettings.from_env()
    updates = {}
    if args.instructions_dir:
        updates['instructions_dir'] = Path(args.instructions_dir)
    elif args.root:
        updates['instructions_dir'] = Path(args.root) / "instructions"
    if args.mode:
        updates['mode'] = ResolverMode(args.mode)
    return settings.model_copy(update=updates)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = settings_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    resolver = build_resolver(settings)

    if args.command == "sets":
        sets = resolver.list_instruction_sets()
        if not sets:
            print(f"No instruction sets found in {settings.instructions_dir}", file=sys.stderr)
            return 1
        for name, domains in sets.items():
            print(f"{name}: {', '.join(domains)}")
        return 0

    context = resolver.resolve(args.url)
    if context is None:
        print(f"No context found for {args.url}", file=sys.stderr)
        return 1

    print(resolver.format_for_prompt(context, args.url) if args.format else context)
    return 0


if __name__ == "__main__":
    sys.exit(main())
