"""
DataTable for paginated records with a selection column
"""

from typing import AbstractSet, Optional, Sequence, Tuple

from rich.text import Text
from textual.binding import Binding
from textual.message import Message
from textual.widgets import DataTable

from ipam_console.core.selection import Tristate

SELECT_COLUMN = "select"

Row = Tuple[str, Sequence[str]]


class RecordTable(DataTable):
    """
    Rows are keyed by record id; the first column shows the checkbox when
    the user may select rows.
    """

    BINDINGS = [
        Binding("space", "toggle_row", "Select row", show=False),
    ]

    class RowToggled(Message):
        """The user asked to flip the selection of one record"""
        def __init__(self, record_id: str) -> None:
            super().__init__()
            self.record_id = record_id

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.cursor_type = "row"
        self.zebra_stripes = True

    def setup_columns(self, labels: Sequence[str]) -> None:
        self.add_column("", key=SELECT_COLUMN, width=3)
        for label in labels:
            self.add_column(label, key=label.lower().replace(" ", "_"))

    def show_records(
        self,
        rows: Sequence[Row],
        selected: AbstractSet[str],
        *,
        selectable: bool,
        header: Optional[Tristate] = None,
    ) -> None:
        """Replace all rows, keeping the cursor on the same line where possible."""
        cursor_row = self.cursor_row
        # header checkbox mirrors the page selection; clear() below repaints it
        self.columns[SELECT_COLUMN].label = Text(header.glyph if selectable and header else "")
        self.clear()
        for record_id, cells in rows:
            if selectable:
                mark = (Tristate.CHECKED if record_id in selected else Tristate.UNCHECKED).glyph
            else:
                mark = ""
            # plain Text so brackets in values are never read as markup
            self.add_row(Text(mark), *(Text(cell) for cell in cells), key=record_id)
        if rows:
            self.move_cursor(row=min(max(cursor_row, 0), len(rows) - 1), animate=False)

    def cursor_record_id(self) -> Optional[str]:
        if self.row_count == 0:
            return None
        row_key, _ = self.coordinate_to_cell_key(self.cursor_coordinate)
        return row_key.value

    def action_toggle_row(self) -> None:
        record_id = self.cursor_record_id()
        if record_id is not None:
            self.post_message(self.RowToggled(record_id))

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Enter / click on a row toggles it as well"""
        event.stop()
        if event.row_key.value is not None:
            self.post_message(self.RowToggled(event.row_key.value))
