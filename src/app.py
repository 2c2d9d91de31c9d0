"""Application entry point for the integrity check viewer."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from rich.console import Console
from rich.table import Table

import settings
from adapters.report_loader import Report, ReportError, load_report
from core.models import Column
from core.view_model import IntegrityCheckViewModel

NAME = "INTEGRITY"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    # Console output is off by default; it would draw over the TUI.
    if config.get("console", False):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/integrity-check.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _load(path: Optional[str]) -> Report:
    try:
        return load_report(path or settings.REPORT_PATH)
    except (ReportError, OSError) as exc:
        logging.getLogger(__name__).error("Cannot load report: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc


def _view(path: Optional[str]) -> None:
    report = _load(path)
    _print_banner()
    from frontend.app import IntegrityCheckApp

    IntegrityCheckApp(
        report,
        double_click_interval=settings.DOUBLE_CLICK_INTERVAL,
        message_clip_chars=settings.MESSAGE_CLIP_CHARS,
    ).run()


def _apply_filters(view_model: IntegrityCheckViewModel, column: Column, allowed: Optional[list[str]]) -> None:
    if allowed:
        view_model.set_filter(column, allowed)


def _list(path: Optional[str], keys: Optional[list[str]], fields: Optional[list[str]], texts: Optional[list[str]]) -> None:
    report = _load(path)
    view_model = IntegrityCheckViewModel(report.messages)
    _apply_filters(view_model, Column.KEY, keys)
    _apply_filters(view_model, Column.FIELD, fields)
    _apply_filters(view_model, Column.MESSAGE, texts)

    table = Table(title="Check integrity")
    for column in view_model.columns:
        table.add_column(column.heading)
    visible = view_model.visible_messages()
    for message in visible:
        table.add_row(*view_model.row_values(message))

    console = Console()
    console.print(table)
    console.print(f"{len(visible)} of {len(view_model.messages)} messages", style="dim")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="integrity-check")
    subparsers = parser.add_subparsers(dest="command")

    view_parser = subparsers.add_parser("view", help="Browse a report in the TUI")
    view_parser.add_argument("report", nargs="?", help="Report file (default: config report_path)")

    list_parser = subparsers.add_parser("list", help="Print the messages of a report")
    list_parser.add_argument("report", nargs="?", help="Report file (default: config report_path)")
    list_parser.add_argument("--key", action="append", help="Only show this citation key (repeatable)")
    list_parser.add_argument("--field", action="append", help="Only show this field display name (repeatable)")
    list_parser.add_argument("--message", action="append", help="Only show this message (repeatable)")

    args = parser.parse_args(argv)
    _configure_logging()
    logging.getLogger(__name__).info("Starting integrity check viewer")

    if args.command == "list":
        _list(args.report, args.key, args.field, args.message)
        return
    _view(getattr(args, "report", None))


if __name__ == "__main__":
    main()
