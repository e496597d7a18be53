"""Command-line interface for sdkcatalog: list, filter and summarize SDK manager reports."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from sdkcatalog.api import filter_packages, group_by_category, read_report, summarize
from sdkcatalog.config import default_report_path, layout_from_env
from sdkcatalog.core.catalog import has_packages, parse_report, sort_packages
from sdkcatalog.core.parser import InstallState, Package

STATE_CHOICES = [state.value.lower() for state in InstallState]
STATE_MARKERS = {
    InstallState.INSTALLED: "i",
    InstallState.AVAILABLE: " ",
    InstallState.UPDATEABLE: "U",
}


def _read_input(args: argparse.Namespace) -> str | None:
    """Read the report named on the command line, from stdin, or from SDKCATALOG_REPORT."""
    report = getattr(args, "report", None)
    if report == "-":
        return sys.stdin.read()
    path = Path(report) if report else default_report_path()
    if path is None:
        print(
            "No report given. Pass a file (or - for stdin), or set SDKCATALOG_REPORT.",
            file=sys.stderr,
        )
        return None
    text = read_report(path)
    if text is None:
        print(f"Report not found: {path}", file=sys.stderr)
    return text


def _load(args: argparse.Namespace) -> list[Package] | None:
    text = _read_input(args)
    if text is None:
        return None
    layout = layout_from_env(header_rows=getattr(args, "header_rows", None))
    return parse_report(text, layout)


def _print_packages(packages: list[Package], verbose: bool = False) -> None:
    """Print one package per line: state marker, raw name, version."""
    width = max((len(p.raw_name) for p in packages), default=0)
    for pkg in packages:
        marker = STATE_MARKERS[pkg.state]
        line = f"  [{marker}] {pkg.raw_name.ljust(width)}  {pkg.version}"
        if verbose and pkg.description:
            line += f"  - {pkg.description}"
        print(line.rstrip())


def cmd_list(args: argparse.Namespace) -> int:
    """List packages from a report."""
    packages = _load(args)
    if packages is None:
        return 1

    states = [InstallState(s.capitalize()) for s in args.state] if args.state else None
    packages = filter_packages(
        packages,
        states=states,
        category=args.category,
        query=args.search,
    )
    if args.order:
        packages = sort_packages(packages, args.order)

    if args.json:
        print(json.dumps([p.to_dict() for p in packages], indent=2))
        return 0

    if not packages:
        print("No packages found.")
        return 0
    print(f"Found {len(packages)} package(s):\n")
    _print_packages(packages, verbose=args.verbose)
    return 0


def cmd_updates(args: argparse.Namespace) -> int:
    """List installed packages that have a newer version available."""
    packages = _load(args)
    if packages is None:
        return 1
    updates = filter_packages(packages, states=[InstallState.UPDATEABLE])

    if args.json:
        print(
            json.dumps(
                [
                    {
                        "raw_name": p.raw_name,
                        "installed": p.installed_version,
                        "available": p.available_version,
                    }
                    for p in updates
                ],
                indent=2,
            )
        )
        return 0

    if not updates:
        print("All installed packages are up to date.")
        return 0
    print(f"{len(updates)} update(s) available:\n")
    width = max(len(p.raw_name) for p in updates)
    for pkg in updates:
        installed = pkg.installed_version
        print(f"  {pkg.raw_name.ljust(width)}  {installed} -> {pkg.available_version}")
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    """Summarize a report by state and category."""
    packages = _load(args)
    if packages is None:
        return 1
    summary = summarize(packages)

    if args.json:
        print(json.dumps(summary, indent=2))
        return 0

    print(f"Total: {summary['total']} package(s)")
    print(f"  Installed:  {summary['installed']}")
    print(f"  Updateable: {summary['updateable']}")
    print(f"  Available:  {summary['available']}")
    if summary["categories"]:
        print("\nBy category:")
        for category, pkgs in group_by_category(packages).items():
            installed = sum(1 for p in pkgs if p.is_installed)
            print(f"  {category} ({len(pkgs)}, {installed} installed)")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Exit 0 if the report lists at least one package."""
    packages = _load(args)
    if packages is None:
        return 1
    if has_packages(packages):
        print(f"OK: {len(packages)} package(s) listed.")
        return 0
    print("No packages listed. Is the SDK root set up?", file=sys.stderr)
    return 1


def cmd_tui(args: argparse.Namespace) -> int:
    """Launch the interactive TUI."""
    from sdkcatalog.tui.app import CatalogApp

    report = getattr(args, "report", None)
    if report == "-":
        print("The TUI cannot read a report from stdin; pass a file path.", file=sys.stderr)
        return 1
    path = Path(report) if report else default_report_path()
    app = CatalogApp(
        report_path=path,
        layout=layout_from_env(header_rows=getattr(args, "header_rows", None)),
    )
    app.run()
    return 0


def _add_report_argument(parser: argparse.ArgumentParser, stdin: bool = True) -> None:
    source = "file path, or - for stdin" if stdin else "file path"
    parser.add_argument(
        "report",
        nargs="?",
        help=f"Captured output of 'sdkmanager --list' ({source}; default: $SDKCATALOG_REPORT)",
    )


def _add_json_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def _non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return n


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the sdkcatalog CLI."""
    parser = argparse.ArgumentParser(
        prog="sdkcatalog",
        description="Explore Android SDK packages from 'sdkmanager --list' output.",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log parser details to stderr",
    )
    parser.add_argument(
        "--header-rows",
        type=_non_negative_int,
        default=None,
        metavar="N",
        help="Table header rows after each section title (default: 2, or $SDKCATALOG_HEADER_ROWS)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # sdkcatalog list
    list_parser = subparsers.add_parser(
        "list",
        help="List packages in a report",
        description="List installed, updateable and available packages.",
    )
    _add_report_argument(list_parser)
    list_parser.add_argument(
        "-o",
        "--order",
        choices=["asc", "desc"],
        default=None,
        help="Sort by package path (default: report order)",
    )
    list_parser.add_argument(
        "--state",
        action="append",
        choices=STATE_CHOICES,
        help="Only show packages in this state (can be repeated)",
    )
    list_parser.add_argument(
        "-c",
        "--category",
        help="Only show packages of this category (e.g. platforms, build-tools)",
    )
    list_parser.add_argument(
        "--search",
        metavar="TEXT",
        help="Only show packages whose path or description contains TEXT",
    )
    list_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show package descriptions",
    )
    _add_json_argument(list_parser)
    list_parser.set_defaults(func=cmd_list)

    # sdkcatalog updates
    updates_parser = subparsers.add_parser(
        "updates",
        help="Show installed packages with a newer version available",
        description="List updateable packages with installed and available versions.",
    )
    _add_report_argument(updates_parser)
    _add_json_argument(updates_parser)
    updates_parser.set_defaults(func=cmd_updates)

    # sdkcatalog summary
    summary_parser = subparsers.add_parser(
        "summary",
        help="Count packages by state and category",
        description="Summarize a report by install state and category.",
    )
    _add_report_argument(summary_parser)
    _add_json_argument(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)

    # sdkcatalog check
    check_parser = subparsers.add_parser(
        "check",
        help="Exit 0 if the report lists any package",
        description="Check that the SDK manager reported at least one package.",
    )
    _add_report_argument(check_parser)
    check_parser.set_defaults(func=cmd_check)

    # sdkcatalog tui (default if no command)
    tui_parser = subparsers.add_parser(
        "tui",
        help="Launch the interactive terminal UI",
        description="Start the interactive TUI for browsing a report.",
    )
    _add_report_argument(tui_parser, stdin=False)
    tui_parser.set_defaults(func=cmd_tui)

    args = parser.parse_args(argv)
    _setup_logging(args.debug)

    # Default to TUI if no command specified
    if args.command is None:
        return cmd_tui(argparse.Namespace(report=None, header_rows=args.header_rows))

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
