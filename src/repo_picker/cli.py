"""CLI interface for repo-picker.

Running ``repo-picker`` with no subcommand opens the interactive picker and
writes the chosen path to the output file. ``shell-init`` prints the shell
function that turns that file into a ``cd``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from . import __version__
from . import config as config_mod
from .render import displayable

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CANCELLED = 1
EXIT_DELIVERY_FAILED = 2

_console = None


def _err_console() -> Console:
    global _console
    if _console is None:
        _console = Console(stderr=True, highlight=False)
    return _console


def _error(msg: str) -> None:
    _err_console().print(f"[red]Error:[/red] {escape(displayable(msg))}")


def configure_logging(debug: bool = False) -> None:
    """Send log records to stderr; DEBUG with --debug, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _settings(args) -> dict:
    """Config file values with command-line overrides applied."""
    cfg = config_mod.load_config()
    overrides = {
        "root": getattr(args, "root", None),
        "marker": getattr(args, "marker", None),
        "output_file": getattr(args, "output", None),
        "threshold": getattr(args, "threshold", None),
        "max_depth": getattr(args, "max_depth", None),
    }
    for key, value in overrides.items():
        if value is not None:
            cfg[key] = value
    if getattr(args, "hidden", False):
        cfg["include_hidden"] = True
    return cfg


def _discover(cfg: dict):
    from .discovery import find_repositories

    return find_repositories(
        config_mod.get_root(cfg),
        marker=str(cfg.get("marker") or ".git"),
        include_hidden=bool(cfg.get("include_hidden")),
        max_depth=config_mod.get_max_depth(cfg),
        exclude=config_mod.get_exclude(cfg),
    )


def cmd_pick(args) -> int:
    """Run the interactive picker and deliver the choice."""
    from .app import Picker
    from .delivery import clear_selection, write_selection

    cfg = _settings(args)
    try:
        items = _discover(cfg)
    except FileNotFoundError as e:
        _error(str(e))
        return EXIT_CANCELLED

    if not items:
        _err_console().print(
            f"No repositories found under {escape(str(config_mod.get_root(cfg)))}"
        )
        return EXIT_CANCELLED

    output = config_mod.get_output_path(cfg)
    try:
        clear_selection(output)
    except OSError as e:
        logger.debug("could not clear %s: %s", output, e)

    picker = Picker(
        items,
        threshold=config_mod.get_threshold(cfg),
        bindings=config_mod.get_key_bindings(cfg),
        theme=config_mod.get_theme(cfg),
        on_select=lambda item: write_selection(output, item.path),
    )
    try:
        selected = picker.run()
    except OSError as e:
        _error(f"terminal error: {e}")
        return EXIT_CANCELLED

    if selected is None:
        return EXIT_CANCELLED
    if picker.delivery_error is not None:
        _error(f"could not write {output}: {picker.delivery_error}")
        return EXIT_DELIVERY_FAILED
    return EXIT_OK


def cmd_list(args) -> int:
    """Print discovered repositories, optionally ranked by --query."""
    from .fuzzy import rank

    cfg = _settings(args)
    try:
        items = _discover(cfg)
    except FileNotFoundError as e:
        _error(str(e))
        return EXIT_CANCELLED

    if args.query:
        items = rank(args.query, items, threshold=config_mod.get_threshold(cfg))
    for item in items:
        print(f"{displayable(item.name)}\t{displayable(item.path)}")
    return EXIT_OK if items else EXIT_CANCELLED


SHELL_FUNCTIONS = {
    "bash": """\
{name}() {{
    command repo-picker "$@" && cd -- "$(cat -- {output})"
}}
""",
    "zsh": """\
{name}() {{
    command repo-picker "$@" && cd -- "$(cat -- {output})"
}}
""",
    "fish": """\
function {name}
    command repo-picker $argv; and cd (cat {output})
end
""",
}


def shell_function(shell: str, output: Path, name: str = "rp") -> str:
    """Shell snippet that runs the picker and cds into the result."""
    quoted = "'" + str(output).replace("'", "'\\''") + "'"
    return SHELL_FUNCTIONS[shell].format(name=name, output=quoted)


def cmd_shell_init(args) -> int:
    cfg = _settings(args)
    print(shell_function(args.shell, config_mod.get_output_path(cfg), args.name), end="")
    return EXIT_OK


def cmd_config(args) -> int:
    """Show, locate or initialize the config file."""
    import yaml

    if args.init:
        path = config_mod.ensure_config()
        print(path)
        return EXIT_OK
    if args.path:
        print(config_mod.get_config_path())
        return EXIT_OK
    print(yaml.safe_dump(config_mod.load_config(), default_flow_style=False, sort_keys=False), end="")
    return EXIT_OK


def _common_options() -> argparse.ArgumentParser:
    """Options accepted before or after any subcommand."""
    common = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
    common.add_argument("--debug", action="store_true", help="Log debug output to stderr")
    common.add_argument("--output", help="File the chosen path is written to")
    return common


def _scan_options() -> argparse.ArgumentParser:
    """Discovery overrides shared by the picker and ``list``."""
    scan = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
    scan.add_argument("--root", help="Directory to scan (default: ~)")
    scan.add_argument("--marker", help="Entry that marks a repository (default: .git)")
    scan.add_argument("--max-depth", type=int, help="Maximum scan depth below the root")
    scan.add_argument("--hidden", action="store_true", help="Also scan hidden directories")
    scan.add_argument("--threshold", type=int, help="Minimum fuzzy score to list an item")
    return scan


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Shared options default to SUPPRESS so a value given before the
    subcommand is not reset by the subcommand's own copy of the option.
    """
    common = _common_options()
    scan = _scan_options()

    parser = argparse.ArgumentParser(
        prog="repo-picker",
        description="repo-picker: fuzzy-find a repository and jump to it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        parents=[common, scan],
    )
    parser.add_argument("--version", action="version", version=f"repo-picker {__version__}")
    parser.set_defaults(func=cmd_pick)

    subparsers = parser.add_subparsers(dest="command")

    list_p = subparsers.add_parser(
        "list", help="List discovered repositories", parents=[common, scan]
    )
    list_p.add_argument("--query", "-q", help="Rank by fuzzy query")
    list_p.set_defaults(func=cmd_list)

    shell_p = subparsers.add_parser(
        "shell-init", help="Print shell integration function", parents=[common]
    )
    shell_p.add_argument("--shell", choices=sorted(SHELL_FUNCTIONS), default="bash", help="Target shell")
    shell_p.add_argument("--name", default="rp", help="Function name (default: rp)")
    shell_p.set_defaults(func=cmd_shell_init)

    config_p = subparsers.add_parser(
        "config", help="Show effective configuration", parents=[common]
    )
    config_group = config_p.add_mutually_exclusive_group()
    config_group.add_argument("--path", action="store_true", help="Print config file path")
    config_group.add_argument("--init", action="store_true", help="Write default config if missing")
    config_p.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(getattr(args, "debug", False))

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print()
        return 130


def run() -> None:
    sys.exit(main())
