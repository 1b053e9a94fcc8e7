"""Table output: a human readable text table, or json, csv and xml."""

import base64
import io
import json
import re
import xml.etree.ElementTree as ET
from collections.abc import Sequence

import polars as pl
from rich import box
from rich.cells import cell_len
from rich.console import Console
from rich.table import Table
from rich.text import Text

from storeconfig.domain.config import RenderRow
from storeconfig.domain.errors import UnknownFormatError

HEADERS = ("Path", "Scope", "Scope-ID", "Value")
SCHEMA = [
    ("Path", pl.Utf8),
    ("Scope", pl.Utf8),
    ("Scope-ID", pl.Int64),
    ("Value", pl.Utf8),
]

DEFAULT_FORMAT = "default"
FORMATS = (DEFAULT_FORMAT, "json", "csv", "xml")

DISPLAY_NULL_UNKNOWN_VALUE = 'NULL (NULL/"unknown" value)'
NULL_STRING = "NULL"

# C0 and C1 controls other than tab and newline; rich drops them from Text
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")
CONTROL_ESCAPES = {"\r": "\\r", "\x0b": "\\v", "\x0c": "\\f", "\x08": "\\b", "\x07": "\\a"}

# anything outside the XML 1.0 Char production
XML_INVALID_CHARS = re.compile("[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def normalize_format(table_format: str | None) -> str:
    """Map ``None``/empty to the text table and reject unknown formats."""
    if table_format is None or table_format == "":
        return DEFAULT_FORMAT
    normalized = table_format.lower()
    if normalized not in FORMATS:
        raise UnknownFormatError(table_format)
    return normalized


def table_value(value: str | None, table_format: str) -> str | None:
    """Display value of a cell; nulls are shown differently per format."""
    if value is not None:
        return value
    if table_format == DEFAULT_FORMAT:
        return DISPLAY_NULL_UNKNOWN_VALUE
    if table_format == "json":
        return None
    if table_format in ("csv", "xml"):
        return NULL_STRING
    raise UnknownFormatError(table_format)


def build_frame(rows: Sequence[RenderRow], table_format: str) -> pl.DataFrame:
    return pl.DataFrame(
        [
            (row.path, row.scope.value, row.scope_id, table_value(row.display_value, table_format))
            for row in rows
        ],
        schema=SCHEMA,
        orient="row",
    )


def _split_lines(text: str) -> list[str]:
    return text.rstrip("\n").split("\n")


def escape_control_chars(text: str) -> str:
    """Show control characters as visible escapes, e.g. ``\\r`` or ``\\x1b``."""
    return CONTROL_CHARS.sub(
        lambda match: CONTROL_ESCAPES.get(match.group(), f"\\x{ord(match.group()):02x}"), text
    )


def _render_text(frame: pl.DataFrame) -> list[str]:
    table = Table(box=box.ASCII, header_style="", show_edge=True)
    widths = [cell_len(header) for header in HEADERS]
    for header in HEADERS:
        table.add_column(header, no_wrap=True)

    for record in frame.iter_rows():
        cells = [escape_control_chars(str(cell).expandtabs()) for cell in record]
        for index, cell in enumerate(cells):
            widths[index] = max([widths[index], *(cell_len(line) for line in cell.split("\n"))])
        table.add_row(*(Text(cell) for cell in cells))

    # one space of padding per side, one border per column plus the closing border
    width = sum(widths) + 3 * len(widths) + 1
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=width,
        color_system=None,
        force_terminal=False,
        highlight=False,
        emoji=False,
        markup=False,
    )
    console.print(table)
    return [line.rstrip() for line in _split_lines(buffer.getvalue())]


def _render_json(frame: pl.DataFrame) -> list[str]:
    return _split_lines(json.dumps(frame.to_dicts(), indent=4, ensure_ascii=False))


def _render_csv(frame: pl.DataFrame) -> list[str]:
    return _split_lines(frame.write_csv())


def _xml_cell(parent: ET.Element, tag: str, value: str) -> None:
    cell = ET.SubElement(parent, tag)
    if XML_INVALID_CHARS.search(value):
        cell.set("encoding", "base64")
        value = base64.b64encode(value.encode("utf-8", "surrogatepass")).decode("ascii")
    cell.text = value


def _render_xml(frame: pl.DataFrame) -> list[str]:
    root = ET.Element("table")
    headers = ET.SubElement(root, "headers")
    for header in HEADERS:
        ET.SubElement(headers, "header").text = header
    for record in frame.iter_rows(named=True):
        row = ET.SubElement(root, "row")
        for header in HEADERS:
            _xml_cell(row, header, str(record[header]))
    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")
    return ['<?xml version="1.0" encoding="UTF-8"?>', *_split_lines(body)]


_RENDERERS = {
    DEFAULT_FORMAT: _render_text,
    "json": _render_json,
    "csv": _render_csv,
    "xml": _render_xml,
}


def render_table(rows: Sequence[RenderRow], table_format: str | None = None) -> list[str]:
    """
    Render rows as a table.

    Args:
        rows: Ordered rows
        table_format: One of ``default``, ``json``, ``csv``, ``xml`` (None means default)

    Returns:
        Output lines

    Raises:
        UnknownFormatError: For any other format
    """
    normalized = normalize_format(table_format)
    return _RENDERERS[normalized](build_frame(rows, normalized))
