"""Tests for policysummary.formatters."""

import json

from rich.console import Console

from policysummary.formatters import (
    JsonFormatter,
    PolicySummaryRow,
    TextFormatter,
    get_formatter,
)
from policysummary.models import Policy, PolicyStatus


def _row(**kwargs) -> PolicySummaryRow:
    defaults = dict(name="Readers", effect="Allow", id="pol-1", status=PolicyStatus.ACTIVE)
    defaults.update(kwargs)
    summary = defaults.pop("summary", "This policy ALLOWS Alice to perform read actions on Reports.")
    return PolicySummaryRow(policy=Policy(**defaults), summary=summary)


def _record_console() -> Console:
    """Return a Console that records output for later inspection."""
    return Console(record=True, highlight=False, width=200)


# ---------------------------------------------------------------------------
# TextFormatter
# ---------------------------------------------------------------------------


def test_text_formatter_shows_name_effect_and_summary():
    console = _record_console()
    TextFormatter(console=console).render([_row()])
    output = console.export_text()
    assert "Readers" in output
    assert "Allow" in output
    assert "This policy ALLOWS Alice" in output


def test_text_formatter_status_column():
    console = _record_console()
    TextFormatter(console=console).render([_row(status=PolicyStatus.DRAFT)])
    assert "Draft" in console.export_text()


def test_text_formatter_missing_status_dash():
    console = _record_console()
    TextFormatter(console=console).render([_row(status=None)])
    assert "-" in console.export_text()


def test_text_formatter_multiple_rows():
    console = _record_console()
    rows = [_row(name="PolicyA"), _row(name="PolicyB", effect="Deny")]
    TextFormatter(console=console).render(rows)
    output = console.export_text()
    assert "PolicyA" in output
    assert "PolicyB" in output
    assert "Deny" in output


def test_text_formatter_no_rows():
    console = _record_console()
    TextFormatter(console=console).render([])
    assert "(no policies)" in console.export_text()


# ---------------------------------------------------------------------------
# JsonFormatter
# ---------------------------------------------------------------------------


def test_json_formatter_rows(capsys):
    JsonFormatter().render([_row(), _row(name="Blockers", effect="Deny", status=None, id=None)])
    data = json.loads(capsys.readouterr().out)
    assert data[0] == {
        "id": "pol-1",
        "name": "Readers",
        "effect": "Allow",
        "status": "Active",
        "summary": "This policy ALLOWS Alice to perform read actions on Reports.",
    }
    assert data[1]["status"] is None
    assert data[1]["id"] is None


def test_json_formatter_empty(capsys):
    JsonFormatter().render([])
    assert json.loads(capsys.readouterr().out) == []


# ---------------------------------------------------------------------------
# get_formatter factory
# ---------------------------------------------------------------------------


def test_get_formatter_text():
    f = get_formatter("text")
    assert isinstance(f, TextFormatter)


def test_get_formatter_json():
    f = get_formatter("json")
    assert isinstance(f, JsonFormatter)


def test_get_formatter_text_with_custom_console():
    console = _record_console()
    f = get_formatter("text", console=console)
    assert isinstance(f, TextFormatter)
    assert f.console is console


def test_text_formatter_brackets_rendered_literally():
    console = _record_console()
    row = _row(
        name="[b]Admins",
        summary="This policy ALLOWS Employee (when tag is [/x]) to perform read actions on Report.",
    )
    TextFormatter(console=console).render([row])
    output = console.export_text()
    assert "[b]Admins" in output
    assert "(when tag is [/x])" in output
