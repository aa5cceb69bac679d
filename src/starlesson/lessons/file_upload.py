"""Upload a CSV file and look at it."""

import csv
import io
from typing import Dict, List

from starlesson import calc, render, ui

TITLE = "File upload"
SUMMARY = [
    "`input_file` reads the chosen file in the browser and sends it along "
    "with the other inputs. The value is a list of uploaded files, or None "
    "while nothing has been uploaded.",
    "Check for None yourself to show a default message, as the summary below "
    "does.",
]

MAX_PREVIEW_ROWS = 10

app_ui = ui.sidebar_layout(
    [
        ui.input_file("upload", "CSV file", accept=".csv,text/csv"),
        ui.input_checkbox("header", "First row is a header", True),
    ],
    [
        ui.card(ui.output_text("summary"), header="Summary"),
        ui.card(ui.output_table("preview"), header="Preview"),
    ],
)


def parse_csv(text: str, header: bool = True) -> List[Dict[str, str]]:
    """Rows of `text` as dicts keyed by the header row, or by column number."""
    rows = list(csv.reader(io.StringIO(text)))
    rows = [row for row in rows if any(cell.strip() for cell in row)]
    if not rows:
        return []
    if header:
        columns, body = rows[0], rows[1:]
    else:
        width = max(len(row) for row in rows)
        columns, body = [f"V{i + 1}" for i in range(width)], rows
    return [{col: (row[i] if i < len(row) else "") for i, col in enumerate(columns)} for row in body]


def server(input, output, session):
    @calc
    def dataset():
        files = input.upload()
        if not files:
            return None
        return parse_csv(files[0].text(), header=input.header())

    @render.text
    def summary():
        files = input.upload()
        if not files:
            return "No file uploaded"
        rows = dataset()
        columns = len(rows[0]) if rows else 0
        return f"{files[0].name}: {files[0].size} bytes, {len(rows)} rows, {columns} columns"

    @render.table
    def preview():
        rows = dataset()
        if rows is None:
            return None
        return rows[:MAX_PREVIEW_ROWS]
