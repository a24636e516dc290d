"""
Step 5: Result Output

Formats a ResultTable for people and for other tools:
- csv: two columns with a header row
- jsonl: one json object per row
- markdown: a pandoc grid table whose widest cells are word-wrapped until the
  table fits the target line width or no column can be narrowed further
"""

import csv
import io
import json
import logging
import statistics
import textwrap
from pathlib import Path
from typing import List, Optional, Sequence

from .d_orchestration import ResultTable

logger = logging.getLogger(__name__)

FORMATS = ("csv", "jsonl", "markdown")

# Written in CSV cells for NO_MATCH, as pandas and R read it back as missing
NA_MARKER = "NA"

_EXTENSIONS = {".csv": "csv", ".jsonl": "jsonl", ".md": "markdown", ".markdown": "markdown"}


def effective_width(cell: str) -> int:
    """Width of a cell: its longest line."""
    return max(len(line) for line in cell.split("\n"))


def render_grid_table(columns: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """
    Render a pandoc grid table. Cells may span several lines.

    Args:
        columns: Header cells
        rows: Body cells, already converted to text

    Returns:
        The table as markdown text
    """
    widths = [effective_width(header) for header in columns]
    for row in rows:
        for col, cell in enumerate(row):
            widths[col] = max(widths[col], effective_width(cell))

    def border(fill: str) -> str:
        return "+" + "+".join(fill * (width + 2) for width in widths) + "+"

    def render_row(cells: Sequence[str]) -> List[str]:
        split = [cell.split("\n") for cell in cells]
        height = max(len(lines) for lines in split)
        rendered = []
        for line_no in range(height):
            parts = []
            for col, lines in enumerate(split):
                text = lines[line_no] if line_no < len(lines) else ""
                parts.append(" " + text.ljust(widths[col]) + " ")
            rendered.append("|" + "|".join(parts) + "|")
        return rendered

    lines = [border("-")]
    lines.extend(render_row(columns))
    lines.append(border("="))
    for row in rows:
        lines.extend(render_row(row))
        lines.append(border("-"))
    return "\n".join(lines)


def _line_width(markdown: str) -> int:
    return max(len(line) for line in markdown.split("\n"))


def _column_spread(rows: Sequence[Sequence[str]], col: int) -> float:
    widths = [effective_width(row[col]) for row in rows]
    if len(widths) < 2:
        return 0.0
    return statistics.stdev(widths)


def _force_extra_line(text: str) -> str:
    """Re-wrap text at the largest width that adds one line."""
    current_lines = len(text.split("\n"))
    words = " ".join(text.split())
    new_width = effective_width(text) - 1
    while True:
        wrapped = "\n".join(
            textwrap.wrap(words, width=new_width, break_long_words=False)
        )
        if len(wrapped.split("\n")) > current_lines or new_width <= 1:
            return wrapped
        new_width -= 1


def render_markdown(table: ResultTable, max_width: int = 80) -> str:
    """
    Render the table as a grid table that fits max_width where possible.

    The column whose cell widths vary most is narrowed first, one line break
    at a time in its widest cell. A column drops out of consideration once its
    widest cell is a single word, or its header is at least as long as the
    longest word in that cell.
    """
    columns = list(table.columns)
    rows = [[row.original, row.derived or ""] for row in table.rows]

    markdown = render_grid_table(columns, rows)
    candidates = list(range(len(columns)))

    while rows and _line_width(markdown) > max_width:
        if not candidates:
            logger.info("No modifiable columns left, writing as-is.")
            break

        col = max(candidates, key=lambda c: _column_spread(rows, c))
        row_no = max(range(len(rows)), key=lambda r: effective_width(rows[r][col]))
        offending = rows[row_no][col]

        words = offending.split()
        longest_word = max((len(word) for word in words), default=0)
        if (
            not words
            or effective_width(offending) == longest_word
            or len(columns[col]) >= longest_word
        ):
            logger.debug(
                f"Column '{columns[col]}' cannot be shortened further, "
                f"excluding it from processing."
            )
            candidates.remove(col)
            continue

        rows[row_no][col] = _force_extra_line(offending)
        markdown = render_grid_table(columns, rows)

    return markdown


def render_csv(table: ResultTable, na_rep: str = NA_MARKER) -> str:
    """CSV with a header row; a missing match is written as na_rep."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(table.columns)
    for row in table.rows:
        writer.writerow([row.original, na_rep if row.derived is None else row.derived])
    return buffer.getvalue()


def render_jsonl(table: ResultTable) -> str:
    return "".join(
        json.dumps(record, ensure_ascii=False) + "\n" for record in table.to_dicts()
    )


def format_table(table: ResultTable, fmt: str = "csv", max_width: int = 80) -> str:
    """Render the table in one of FORMATS."""
    if fmt == "csv":
        return render_csv(table)
    elif fmt == "jsonl":
        return render_jsonl(table)
    elif fmt == "markdown":
        return render_markdown(table, max_width=max_width) + "\n"
    else:
        raise ValueError(f"Unknown output format: {fmt}. Choose one of {FORMATS}")


def infer_format(path: Path, default: str = "csv") -> str:
    return _EXTENSIONS.get(path.suffix.lower(), default)


def save_table(
    table: ResultTable,
    output_path: Path,
    fmt: Optional[str] = None,
    max_width: int = 80,
) -> Path:
    """Save the table to a file, inferring the format from the extension if not given."""
    output_path = Path(output_path)
    fmt = fmt or infer_format(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(format_table(table, fmt, max_width=max_width))

    logger.info(f"Saved {len(table)} rows to {output_path} ({fmt})")
    return output_path
