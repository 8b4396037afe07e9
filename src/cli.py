"""Command-line interface for layercheck."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from check.checker import check
from errors import LayerCheckError
from report.format import render_json, render_text, write_json
from rules.config import load_config
from rules.layers import BUILTIN_RULES, RuleSet
from scan.build import build_graph

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="layercheck")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Check module dependencies against layer rules"
    )
    check_parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )
    check_parser.add_argument(
        "--config",
        default=None,
        help="Config file (default: <root>/layercheck.toml)",
    )
    check_parser.add_argument(
        "--rule",
        action="append",
        dest="rules",
        default=None,
        help="Rule to enable; repeat to enable several (default: config enabled_rules)",
    )
    check_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    check_parser.add_argument(
        "--output",
        default=None,
        help="Also write the JSON report to this file",
    )

    subparsers.add_parser("rules", help="List built-in rules")

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _handle_check(
    root: Path,
    config_file: str | None,
    rule_names: list[str] | None,
    output_format: str,
    output: str | None,
) -> int:
    config_path = Path(config_file).expanduser().resolve() if config_file else None
    try:
        config = load_config(root, config_path)
        rule_set = RuleSet.from_names(
            rule_names if rule_names is not None else config.enabled_rules
        )
        graph = build_graph(root, config)
        report = check(graph, rule_set)
    except LayerCheckError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_ERROR

    if output_format == "json":
        sys.stdout.write(render_json(report).decode("utf-8"))
    else:
        sys.stdout.write(render_text(report))

    if output is not None:
        try:
            write_json(Path(output).expanduser().resolve(), report)
        except OSError as exc:
            sys.stderr.write(f"error: cannot write report: {exc}\n")
            return EXIT_ERROR

    return EXIT_OK if report.ok else EXIT_VIOLATIONS


def _handle_rules() -> int:
    for rule in BUILTIN_RULES:
        sys.stdout.write(f"{rule.name}: {rule.description}\n")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "check":
        root = Path(args.root).expanduser().resolve()
        return _handle_check(root, args.config, args.rules, args.format, args.output)

    if args.command == "rules":
        return _handle_rules()

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
