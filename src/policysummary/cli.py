"""policysummary CLI entry point."""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.markup import escape

from .formatters import PolicySummaryRow, get_formatter
from .loader import PolicyFormatError, loads_policies
from .summary import (
    DEFAULT_MAX_LENGTH,
    generate_policy_summary,
    generate_short_policy_summary,
)


@click.command()
@click.argument("policy_file", metavar="FILE", type=click.File("r", encoding="utf-8"))
@click.option(
    "--short/--full",
    default=False,
    show_default=True,
    help="Truncate each summary to --max-length characters.",
)
@click.option(
    "--max-length",
    type=click.IntRange(min=4),
    default=DEFAULT_MAX_LENGTH,
    show_default=True,
    envvar="POLICYSUMMARY_MAX_LENGTH",
    help="Truncation width used with --short.",
)
@click.option(
    "--output",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    envvar="POLICYSUMMARY_OUTPUT",
    help="Output format.",
)
@click.option(
    "--effect",
    type=click.Choice(["Allow", "Deny"]),
    default=None,
    help="Only summarise policies with this effect.",
)
def main(
    policy_file,
    short: bool,
    max_length: int,
    output: str,
    effect: str | None,
) -> None:
    """Describe CRAFT access-control policies in plain English.

    FILE is a JSON export of one policy, a list of policies, or a CRAFT API
    response (``{"success": true, "data": [...]}``).  Use ``-`` for stdin.

    Exit code is 0 on success, 2 for unreadable or malformed input.
    """
    # Diagnostics (errors) go to stderr; summaries go to stdout.
    err = Console(stderr=True, highlight=False)

    # 1. Parse policies
    try:
        policies = loads_policies(policy_file.read())
    except PolicyFormatError as exc:
        err.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        sys.exit(2)
    except UnicodeDecodeError as exc:
        err.print(f"[bold red]Error:[/bold red] {escape(policy_file.name)} is not UTF-8 text: {escape(str(exc))}")
        sys.exit(2)

    # 2. Filter
    if effect is not None:
        policies = [p for p in policies if p.effect == effect]

    # 3. Summarise
    rows = []
    for policy in policies:
        if short:
            text = generate_short_policy_summary(policy, max_length)
        else:
            text = generate_policy_summary(policy)
        rows.append(PolicySummaryRow(policy=policy, summary=text))

    # 4. Output
    out_console = Console(highlight=False)
    formatter = get_formatter(output, console=out_console)
    formatter.render(rows)
