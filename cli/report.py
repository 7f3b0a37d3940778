#!/usr/bin/env python3

import sys
from ingestion.csv_transactions import parse_amount
from models.report import Period, Report, SubtotalBy
from logger import get_logger

logger = get_logger()

NAME_WIDTH = 40
VALUE_WIDTH = 14


def format_amount(value) -> str:
    """Format minor units as a decimal amount, e.g. -123456 -> "-1,234.56"."""
    if value is None:
        return ""
    sign = "-" if value < 0 else ""
    major, minor = divmod(abs(value), 100)
    return f"{sign}{major:,}.{minor:02d}"


def report_from_args(args, config) -> Report:
    """Build resolved report parameters from CLI arguments and config defaults."""
    period = Period(args.period or config.default_period)
    if args.start or args.end or args.year:
        period = Period.CUSTOM

    report = Report(
        budget_name=args.budget or config.default_budget,
        period=period,
        year=args.year or 0,
        start_month=args.start or 1,
        end_month=args.end or 12,
        subtotal_by=SubtotalBy(args.subtotal or config.subtotal_by),
        subtotal_parents=config.subtotal_parents and not args.no_parent_totals,
    )
    return report.resolve_period()


def render(budget_report) -> None:
    """Log the report as a text table."""
    projection = budget_report.projection
    tree = budget_report.tree

    logger.info(f"\nBudget Report: {budget_report.report.budget_name}")
    logger.info(budget_report.report.date_range_label())

    names = projection.column_names()
    header = f"{'#':>4} {names[0]:<{NAME_WIDTH}}" + "".join(
        f"{name:>{VALUE_WIDTH}}" for name in names[1:]
    )
    logger.info(header)
    logger.info("=" * len(header))

    for index, row in enumerate(projection.rows(tree)):
        line = f"{index:>4} {row[0]:<{NAME_WIDTH}}" + "".join(
            f"{format_amount(value):>{VALUE_WIDTH}}" for value in row[1:]
        )
        logger.info(line)

    if budget_report.diagnostics:
        logger.warning(f"\n{len(budget_report.diagnostics)} problem(s) while building:")
        for diagnostic in budget_report.diagnostics:
            logger.warning(f"  {diagnostic.kind.value}: {diagnostic.message}")


def cmd_show(args, services):
    """Build and show a budget report."""
    try:
        report = report_from_args(args, services.config)
        budget_report = services.reports.build(report)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    render(budget_report)


def cmd_edit(args, services):
    """Change a budgeted amount by report row and show the updated report."""
    try:
        report = report_from_args(args, services.config)
        budget_report = services.reports.build(report)
        services.reports.update_budget(
            budget_report, args.row, args.month, parse_amount(args.amount)
        )
    except (ValueError, IndexError) as e:
        logger.error(str(e))
        sys.exit(1)

    render(budget_report)


def _add_report_arguments(parser):
    parser.add_argument("--budget", help="Budget name (default from config)")
    parser.add_argument(
        "--period",
        choices=[p.value for p in Period],
        help="Reporting period (default from config)",
    )
    parser.add_argument("--year", type=int, help="Custom period year")
    parser.add_argument("--start", type=int, help="Custom period first month")
    parser.add_argument("--end", type=int, help="Custom period last month")
    parser.add_argument(
        "--subtotal",
        choices=[s.value for s in SubtotalBy],
        help="Expand value columns per month",
    )
    parser.add_argument(
        "--no-parent-totals",
        action="store_true",
        help="Leave rollup rows blank",
    )


def setup_parser(subparsers):
    """Setup report subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "report",
        help="Budget reports",
        description="Show budget versus actual reports and edit budget amounts",
    )

    report_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available report commands",
        dest="subcommand",
        required=True,
    )

    show_parser = report_subparsers.add_parser("show", help="Show a budget report")
    _add_report_arguments(show_parser)
    show_parser.set_defaults(func=cmd_show)

    edit_parser = report_subparsers.add_parser(
        "edit", help="Change a budgeted amount by report row"
    )
    edit_parser.add_argument("row", type=int, help="Row number shown by 'report show'")
    edit_parser.add_argument("month", type=int, help="Month (1-12)")
    edit_parser.add_argument("amount", help="New amount, e.g. 250.00")
    _add_report_arguments(edit_parser)
    edit_parser.set_defaults(func=cmd_edit)
