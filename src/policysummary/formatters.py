"""Render summarised policies to the terminal (Rich) or as JSON."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import Policy


@dataclass(frozen=True)
class PolicySummaryRow:
    """A policy paired with its rendered summary sentence."""

    policy: Policy
    summary: str


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

class TextFormatter:
    """Renders summary rows as a Rich table."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False)

    def render(self, rows: Sequence[PolicySummaryRow]) -> None:
        c = self.console

        if not rows:
            c.print("[dim](no policies)[/dim]")
            return

        table = Table(
            title="Policies",
            show_header=True,
            header_style="bold",
            box=None,
            padding=(0, 2),
        )
        table.add_column("Name", style="bold")
        table.add_column("Effect")
        table.add_column("Status", style="dim")
        table.add_column("Summary", overflow="fold")
        for row in rows:
            policy = row.policy
            table.add_row(
                Text(policy.name),
                Text(policy.effect, style=_effect_style(policy)),
                policy.status.value if policy.status else "-",
                Text(row.summary),
            )
        c.print(table)


class JsonFormatter:
    """Renders summary rows as a JSON list to stdout."""

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def render(self, rows: Sequence[PolicySummaryRow]) -> None:
        data = [_row_to_dict(r) for r in rows]
        print(json.dumps(data, indent=self.indent))


def get_formatter(
    output: str, console: Optional[Console] = None
) -> TextFormatter | JsonFormatter:
    """Factory: ``'text'`` → TextFormatter, ``'json'`` → JsonFormatter."""
    if output == "json":
        return JsonFormatter()
    return TextFormatter(console=console)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _effect_style(policy: Policy) -> str:
    return "bold green" if policy.is_allow else "bold red"


def _row_to_dict(row: PolicySummaryRow) -> dict:
    policy = row.policy
    return {
        "id": policy.id,
        "name": policy.name,
        "effect": policy.effect,
        "status": policy.status.value if policy.status else None,
        "summary": row.summary,
    }
