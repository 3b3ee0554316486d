"""
Auto-discovery CLI dispatcher for guidepack.

Scans ``cli/commands/`` for root commands and ``cli/<domain>/`` subfolders
for domain commands. Adding a command means adding a ``.py`` file that
defines ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from guidepack.core.exceptions import GuidepackError
from guidepack.core.utils.stdlib_logging import configure_stdlib_logging

from ._args import add_verbose_flag
from ._utils import EXIT_ERROR, EXIT_INTERRUPTED, get_config_manager

logger = logging.getLogger(__name__)


def _load_command(module_name: str, default_summary: str) -> dict[str, Any]:
    module = importlib.import_module(module_name)
    return {
        "module": module,
        "summary": getattr(module, "SUMMARY", default_summary),
        "register_args": getattr(module, "register_args", None),
        "main": getattr(module, "main", None),
    }


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """
    Discover CLI domain subfolders (docs, profiles, config).

    Returns:
        Dict mapping domain name to directory path
    """
    cli_dir = Path(__file__).parent
    domains = {}
    for item in cli_dir.iterdir():
        if item.name == "commands":
            continue
        if item.is_dir() and not item.name.startswith("_"):
            # Must have at least one non-private .py file
            has_commands = any(
                f.suffix == ".py" and not f.name.startswith("_")
                for f in item.iterdir()
            )
            if has_commands:
                domains[item.name] = item
    return domains


@lru_cache(maxsize=1)
def discover_root_commands() -> dict[str, dict[str, Any]]:
    """Discover top-level commands under cli/commands (no domain prefix)."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}
    if not commands_dir.exists():
        return commands

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        cmd_name = item.stem
        commands[cmd_name] = _load_command(f"guidepack.cli.commands.{cmd_name}", cmd_name)
    return commands


@lru_cache(maxsize=16)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """
    Discover all commands in a domain subfolder.

    Returns:
        Dict mapping command name to command info dict
    """
    domain_dir = Path(__file__).parent / domain
    commands: dict[str, dict[str, Any]] = {}
    for item in sorted(domain_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        cmd_name = item.stem
        commands[cmd_name] = _load_command(f"guidepack.cli.{domain}.{cmd_name}", f"{domain} {cmd_name}")
    return commands


def _add_command(subparsers: Any, cmd_name: str, cmd_info: dict[str, Any]) -> argparse.ArgumentParser:
    primary_name = cmd_name.replace("_", "-")
    aliases = [cmd_name] if primary_name != cmd_name else []
    cmd_parser = subparsers.add_parser(primary_name, aliases=aliases, help=cmd_info["summary"])
    if cmd_info["register_args"]:
        cmd_info["register_args"](cmd_parser)
    if cmd_info["main"]:
        cmd_parser.set_defaults(_func=cmd_info["main"])
    return cmd_parser


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered domains and commands."""
    parser = argparse.ArgumentParser(
        prog="guidepack",
        description="guidepack - compose AI-assistant guidance bundles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    add_verbose_flag(parser)

    subparsers = parser.add_subparsers(
        dest="domain",
        title="commands",
        metavar="<command>",
    )

    for cmd_name, cmd_info in sorted(discover_root_commands().items()):
        _add_command(subparsers, cmd_name, cmd_info)

    for domain_name in sorted(discover_domains()):
        domain_commands = discover_commands(domain_name)
        if not domain_commands:
            continue
        domain_parser = subparsers.add_parser(
            domain_name,
            help=f"{domain_name.title()} commands",
        )
        cmd_subparsers = domain_parser.add_subparsers(
            dest="command",
            title="commands",
            description=f"Available {domain_name} commands",
            metavar="<command>",
        )
        for cmd_name, cmd_info in sorted(domain_commands.items()):
            _add_command(cmd_subparsers, cmd_name, cmd_info)

    return parser


def _get_version() -> str:
    from guidepack import __version__

    return __version__


def _configure_logging(args: argparse.Namespace) -> None:
    """Set up stdlib logging from ``--verbose`` and the ``logging`` config section.

    A broken configuration is left for the command itself to report; here it
    only means falling back to WARNING on stderr. A log file that cannot be
    opened is reported as a warning and logging continues without it.
    """
    verbose = bool(getattr(args, "verbose", False))
    json_mode = bool(getattr(args, "json", False))
    level = "WARNING"
    log_path = None
    try:
        mgr = get_config_manager(args)
        section = mgr.section("logging")
        level = str(section.get("level") or level)
        if section.get("file"):
            log_path = Path(str(section["file"])).expanduser()
            if not log_path.is_absolute():
                log_path = mgr.repo_root / log_path
    except GuidepackError:
        pass
    if verbose:
        level = "DEBUG"
    # JSON mode keeps stderr quiet unless debugging was asked for.
    stream = verbose or not json_mode
    try:
        configure_stdlib_logging(level=level, log_path=log_path, stream=stream)
    except OSError as e:
        configure_stdlib_logging(level=level, stream=stream)
        logger.warning("Cannot open log file %s: %s", log_path, e)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the guidepack CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (see ``guidepack.cli._utils``)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.domain:
        parser.print_help()
        return 0

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if func is None:
        # Domain given without a command: show the domain's help.
        domain_parser = parser._subparsers._group_actions[0].choices.get(args.domain)  # type: ignore[union-attr]
        if domain_parser:
            domain_parser.print_help()
        return 0

    _configure_logging(args)
    command_name = args.domain if not getattr(args, "command", None) else f"{args.domain} {args.command}"
    logger.debug("Running %s", command_name)

    try:
        return func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.debug("Unhandled error in %s", command_name, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
