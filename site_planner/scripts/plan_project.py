#!/usr/bin/env python3
"""
Plan a project from exported host data.

Reads the project's work items (template rows included) and the workforce
from JSON files, runs the planning engine and prints the schedule as a table,
as JSON rows, or as the list of field updates to write back to the host.

    python -m site_planner.scripts.plan_project items.json --workers workers.json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from site_planner.core.config import settings
from site_planner.core.observability import get_logger, setup_structured_logging
from site_planner.domain.planning.value_objects.working_hours import WorkingHours
from site_planner.domain.shared.exceptions import DomainError
from site_planner.services import PlanningResult, PlanningService

logger = get_logger(__name__)

TABLE_COLUMNS = [
    ("name", "Name", 40),
    ("zone", "Zone", 10),
    ("duration", "Min", 6),
    ("start", "Start", 19),
    ("end", "End", 19),
    ("workers", "Workers", 30),
]


def read_rows(path: Path) -> list[dict[str, Any]]:
    """Read a JSON list of rows (a {"data": [...]} wrapper is accepted too)."""
    with open(path, encoding="utf-8") as file:
        payload = json.load(file)
    if isinstance(payload, dict):
        payload = payload.get("data", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path}: expected a list of rows")
    return payload


def _cell(value: Any, width: int) -> str:
    text = "" if value is None else str(value)
    if len(text) > width:
        text = text[: width - 1] + "…"
    return text.ljust(width)


def print_table(result: PlanningResult) -> None:
    print(" ".join(_cell(title, width) for _, title, width in TABLE_COLUMNS))
    print(" ".join("-" * width for _, _, width in TABLE_COLUMNS))
    for row in result.as_rows():
        print(" ".join(_cell(row[key], width) for key, _, width in TABLE_COLUMNS))
        if row["warning"]:
            print(f"  ! {row['warning']}")

    print()
    print(f"Items: {len(result.items)}  Warnings: {len(result.warnings)}")
    if result.finish:
        print(f"Finish: {result.finish:%d.%m.%Y %H:%M}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Schedule a construction project and assign workers."
    )
    parser.add_argument("items", type=Path, help="JSON file with work items")
    parser.add_argument("--workers", type=Path, help="JSON file with workers")
    parser.add_argument("--day-start", type=int, default=settings.WORK_DAY_START)
    parser.add_argument("--day-end", type=int, default=settings.WORK_DAY_END)
    parser.add_argument("--lunch-start", type=int, default=settings.LUNCH_START)
    parser.add_argument(
        "--reschedule",
        action=argparse.BooleanOptionalAction,
        default=settings.RESCHEDULE_SHORTFALLS,
        help="Move understaffed zoned items to a later start",
    )
    parser.add_argument(
        "--output",
        choices=["table", "json", "updates"],
        default="table",
        help="Schedule table, JSON rows, or write-back field updates",
    )
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main execution function."""
    args = build_parser().parse_args(argv)
    setup_structured_logging(log_level=args.log_level)

    try:
        hours = WorkingHours(args.day_start, args.day_end, args.lunch_start)
        items = read_rows(args.items)
        workers = read_rows(args.workers) if args.workers else []
        result = PlanningService(settings, hours).plan(
            items, workers, reschedule=args.reschedule
        )
    except (OSError, ValueError) as e:
        logger.error("Cannot read input", error=str(e))
        return 2
    except DomainError as e:
        print(json.dumps(e.to_dict(), ensure_ascii=False), file=sys.stderr)
        return 1

    if args.output == "json":
        print(json.dumps(result.as_rows(), ensure_ascii=False, indent=2))
    elif args.output == "updates":
        updates = [update.model_dump(mode="json") for update in result.field_updates()]
        print(json.dumps(updates, ensure_ascii=False, indent=2))
    else:
        print_table(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
