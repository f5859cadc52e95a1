"""Export chart data as CSV text."""

from datetime import date
from typing import Any, Mapping, Sequence


def _format_cell(value: Any) -> str:
    if value is None:
        return ""
    text = str(value)
    if "," in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv(rows: Sequence[Mapping[str, Any]], columns: Sequence[str]) -> str:
    """
    Serialize records to comma-separated text.

    Args:
        rows: Records to write, one line each
        columns: Field names, in output order

    Returns:
        Header line followed by one line per record, joined with newlines.
        Missing or None fields are written empty; values containing a comma
        are quoted with embedded quotes doubled.
    """
    lines = [",".join(columns)]
    for row in rows:
        lines.append(",".join(_format_cell(row.get(col)) for col in columns))
    return "\n".join(lines)


def csv_filename(base: str, quote: str, on: date | None = None) -> str:
    """Default download name, e.g. fx-forecast-USD-EUR-2024-01-31.csv."""
    on = on or date.today()
    return f"fx-forecast-{base}-{quote}-{on.isoformat()}.csv"
