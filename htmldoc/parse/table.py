"""Rebuild tables from <table> markup."""

from __future__ import annotations

from ..dom.tree import DomNode, DomTree
from ..model.nodes import Paragraph, Table, TableCell, TableRow
from .attrs import width_height
from .inline import build_inline

CELL_TAGS = {"td", "th"}

# Row groups are flattened into the table
SECTION_TAGS = {"thead", "tbody", "tfoot"}


def build_cell(tree: DomTree, row: TableRow, node: DomNode) -> None:
    paragraph = Paragraph()
    for child in tree.children(node):
        build_inline(tree, child, paragraph)
    width, _ = width_height(node)
    row.cells.append(TableCell(content=paragraph, width=width))


def build_row(tree: DomTree, table: Table, node: DomNode) -> None:
    """Append a row built from ``node``'s cells. Rows without cells are dropped."""
    row = TableRow()
    for child in tree.children(node):
        if not child.is_element or child.tag not in CELL_TAGS:
            continue
        if not child.children:
            continue
        build_cell(tree, row, child)

    if row.cells:
        table.rows.append(row)


def build_table(tree: DomTree, node: DomNode) -> Table:
    table = Table()
    for child in tree.children(node):
        if child.is_element and child.tag in SECTION_TAGS:
            for row_node in tree.children(child):
                build_row(tree, table, row_node)
        else:
            build_row(tree, table, child)
    return table
