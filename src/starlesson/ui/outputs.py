"""
Output Placeholders

Empty slots in the page, filled later by the renderer registered under the
same id. Renderers reuse these functions to build the fragment that
replaces the placeholder, so placeholder and fragment always share their
id and classes.
"""

from fasthtml.common import *

OUTPUT_CLS = "starlesson-output"


def output_text(output_id: str, *children):
    return Div(*children, id=output_id, cls=f"{OUTPUT_CLS} text-base")


def output_text_verbatim(output_id: str, *children):
    return Pre(*children, id=output_id, cls=f"{OUTPUT_CLS} font-mono text-sm p-3 rounded bg-muted min-h-8")


def output_table(output_id: str, *children):
    return Div(*children, id=output_id, cls=f"{OUTPUT_CLS} overflow-x-auto")


def output_plot(output_id: str, *children):
    return Div(*children, id=output_id, cls=f"{OUTPUT_CLS} w-full")


def output_ui(output_id: str, *children):
    return Div(*children, id=output_id, cls=OUTPUT_CLS)
