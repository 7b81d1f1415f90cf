import argparse
import asyncio
from typing import List, Optional

from . import __version__
from . import commands as cmd
from .config import Settings
from .controller import Workbench
from .env import load_env
from .errors import RemoteError
from .logger import get_logger
from .models import FILTER_COLUMNS, WORK_TYPES, SearchCriteria
from .paging import NEXT
from .remote import AsyncJobService, HttpJobService
from .state import NO_FILTERED_RESULTS_MESSAGE, WorkbenchState

TABLE_COLUMNS = [
    ("id", "ID", 8),
    ("title", "Title", 32),
    ("salary", "Salary", 12),
    ("company", "Company", 20),
    ("location", "Location", 16),
    ("work_type", "Type", 8),
    ("source", "Source", 12),
]


def build_workbench(settings: Settings) -> Workbench:
    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)
    service = AsyncJobService(HttpJobService(settings.base_url, settings.timeout, logger=logger))
    return Workbench(service, settings=settings, logger=logger)


def _criteria(args: argparse.Namespace) -> SearchCriteria:
    return SearchCriteria(
        keywords=args.keywords or "",
        location=args.location or "",
        work_types=tuple(args.work_type or ()),
    )


def _parse_filter(raw: str) -> cmd.ColumnFilterChanged:
    if "=" not in raw:
        raise SystemExit(f"Invalid filter {raw!r}. Use column=value.")
    column, value = raw.split("=", 1)
    return cmd.ColumnFilterChanged(column.strip(), value.strip())


def _cell(value: Optional[str], width: int) -> str:
    text = value or ""
    if len(text) > width:
        text = text[: width - 1] + "…"
    return text.ljust(width)


def render_page(state: WorkbenchState) -> List[str]:
    """Plain-text rendering of the current page and its status lines."""
    if state.search_op.has_error:
        return [f"Error: {state.search_op.error_message}"]
    if state.is_empty:
        return [state.empty_message]
    if state.no_filtered_results:
        return [NO_FILTERED_RESULTS_MESSAGE]
    if not state.has_results:
        return []

    lines = [" ".join(_cell(label, w) for _, label, w in TABLE_COLUMNS).rstrip()]
    for record in state.paged_records:
        lines.append(" ".join(_cell(getattr(record, f), w) for f, _, w in TABLE_COLUMNS).rstrip())
    lines.append(state.page_label)
    if state.has_selection:
        lines.append(state.selection_status)
    return lines


def _run_search(args: argparse.Namespace, wb: Workbench) -> WorkbenchState:
    asyncio.run(wb.search(_criteria(args)))
    try:
        for raw in args.filter or []:
            wb.send(_parse_filter(raw))
        if args.sort:
            wb.send(cmd.SortRequested(args.sort, "desc" if args.desc else "asc"))
        for _ in range(max(0, (args.page or 1) - 1)):
            wb.send(cmd.PageNavigationRequested(NEXT))
    except ValueError as e:
        raise SystemExit(str(e))
    return wb.state


def cmd_search(args: argparse.Namespace) -> None:
    wb = build_workbench(args.settings)
    state = _run_search(args, wb)
    for line in render_page(state):
        print(line)
    if state.search_op.has_error:
        raise SystemExit(1)


def cmd_boards(args: argparse.Namespace) -> None:
    wb = build_workbench(args.settings)
    try:
        boards = asyncio.run(wb.service.list_boards())
    except RemoteError as e:
        raise SystemExit(f"Board lookup failed: {e.message_or('request failed')}")
    if not boards:
        print("No boards available.")
        return
    for b in boards:
        suffix = f" - {b.description}" if b.description else ""
        print(f"{b.value}: {b.label}{suffix}")


def cmd_apply(args: argparse.Namespace) -> None:
    wanted = [i.strip() for i in args.ids.split(",") if i.strip()]
    wb = build_workbench(args.settings)
    state = _run_search(args, wb)
    if state.search_op.has_error:
        raise SystemExit(f"Error: {state.search_op.error_message}")

    by_id = {r.id: r for r in state.base}
    missing = [i for i in wanted if i not in by_id]
    if missing:
        raise SystemExit(f"Not in search results: {', '.join(missing)}")

    wb.send(cmd.SelectionChanged(tuple(by_id[i] for i in wanted)))
    if wb.state.has_selection:
        print(f"{wb.state.selection_status} - {wb.state.create_button_label}")

    notification = asyncio.run(wb.submit())
    print(f"[{notification.variant}] {notification.title}: {notification.message}")
    if notification.variant != "success":
        raise SystemExit(1)


def _add_search_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--keywords", default="", help="Free-text keywords")
    p.add_argument("--location", default="", help="Free-text location")
    p.add_argument("--work-type", action="append", help=f"Work type, e.g. {', '.join(WORK_TYPES)} (repeatable)")
    p.add_argument("--filter", action="append", metavar="COLUMN=VALUE",
                   help=f"Column filter (repeatable). Columns: {', '.join(FILTER_COLUMNS)}")
    p.add_argument("--sort", help="Sort by column")
    p.add_argument("--desc", action="store_true", help="Sort descending")
    p.add_argument("--page", type=int, default=1, help="Page to show (default 1)")


def main(argv: Optional[List[str]] = None):
    # Load .env if present (JOBSEARCH_BASE_URL, JOBSEARCH_TIMEOUT, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="jobsearch", description="Job search workbench CLI")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    srch = subparsers.add_parser("search", help="Search jobs and print one page of results")
    _add_search_args(srch)
    srch.set_defaults(func=cmd_search)

    brd = subparsers.add_parser("boards", help="List job boards known to the backend")
    brd.set_defaults(func=cmd_boards)

    app = subparsers.add_parser("apply", help="Search, select jobs by id and create applications")
    _add_search_args(app)
    app.add_argument("--ids", required=True, help="Comma-separated job ids to apply to")
    app.set_defaults(func=cmd_apply)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        try:
            args.settings = Settings.from_env()
        except ValueError as e:
            raise SystemExit(str(e))
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
