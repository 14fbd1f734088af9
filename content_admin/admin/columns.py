"""Declarative column and filter descriptors and cell rendering."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from .options import EnumRegistry, OptionSource


Row = Mapping[str, Any]
ButtonPredicate = Callable[[Row, str], bool]
CellRenderer = Callable[[Any, Row], Any]

MEDIA_TYPES = ("image", "video", "audio")
ACTIONS_KEY = "actions"


class VisibleColumn(IntEnum):
    ALWAYS = 0
    HIDDEN = 1
    SHOWN = 2


def default_is_button_visible(row: Row, button: str) -> bool:
    """Status/button matrix shared by every module list."""
    status = row.get("status")
    if status == "DRAFT":
        return button in ("edit", "duplicate", "delete")
    if status == "DISABLED":
        return button in ("edit", "duplicate", "enable", "delete")
    if status == "ENABLED":
        return button in ("edit", "duplicate", "disable")
    return False


@dataclass
class ColumnDescriptor:
    title: str
    data_index: str
    key: Optional[str] = None
    width: Optional[int] = None
    align: Optional[str] = None
    fixed: Optional[str] = None
    sortable: bool = False
    render: Optional[CellRenderer] = None
    render_name: Optional[str] = None
    visible_column: Optional[VisibleColumn] = None
    media_type: Optional[str] = None
    options: Optional[OptionSource] = None
    action_buttons: Sequence[str] = ()
    is_show: Optional[ButtonPredicate] = None

    def __post_init__(self):
        if self.key is None:
            self.key = self.data_index
        if self.media_type is not None and self.media_type not in MEDIA_TYPES:
            raise ValueError(f"Unsupported media type: {self.media_type}")
        if self.action_buttons:
            self.width = 70
            self.fixed = "right"
            self.align = "center"

    @property
    def is_actions(self) -> bool:
        return bool(self.action_buttons) or self.data_index == ACTIONS_KEY

    @property
    def always_visible(self) -> bool:
        return self.visible_column in (None, VisibleColumn.ALWAYS) or self.is_actions

    def visible_actions(self, row: Row) -> List[str]:
        predicate = self.is_show or default_is_button_visible
        return [button for button in self.action_buttons if predicate(row, button)]


@dataclass
class FilterSection:
    title: str
    key: str
    options: OptionSource = field(default_factory=list)
    mode: str = "multiple"

    def __post_init__(self):
        if self.mode not in ("single", "multiple"):
            raise ValueError(f"Unsupported filter mode: {self.mode}")


def validate_columns(columns: Iterable[ColumnDescriptor]) -> List[ColumnDescriptor]:
    columns = list(columns)
    seen = set()
    for column in columns:
        if column.key in seen:
            raise ValueError(f"Duplicate column key: {column.key}")
        seen.add(column.key)
    return columns


def missing_fields(rows: Iterable[Row], columns: Iterable[ColumnDescriptor]) -> Dict[str, List[Any]]:
    """Map each data column to the ids of rows lacking its field."""
    data_columns = [c for c in columns if not c.is_actions]
    missing: Dict[str, List[Any]] = {}
    for position, row in enumerate(rows):
        for column in data_columns:
            if column.data_index not in row:
                missing.setdefault(column.data_index, []).append(row.get("id", position))
    return missing


def render_name_column(value: Any, row: Row) -> str:
    return f"{value}\nID:{row.get('id')}"


def render_switch_column(value: Any, row: Row) -> bool:
    return bool(value)


NAMED_RENDERERS: Dict[str, CellRenderer] = {
    "renderNameColumn": render_name_column,
    "renderSwitchColumn": render_switch_column,
}


def render_cell(
    column: ColumnDescriptor,
    row: Row,
    registry: Optional[EnumRegistry] = None,
    renderers: Optional[Mapping[str, CellRenderer]] = None,
) -> Any:
    """Resolve one cell: inline render, then named renderer, then option label, then raw value."""
    value = row.get(column.data_index)
    if column.render is not None:
        return column.render(value, row)

    named = dict(NAMED_RENDERERS)
    if renderers:
        named.update(renderers)
    if column.render_name and column.render_name in named:
        return named[column.render_name](value, row)
    if column.media_type:
        return {"mediaType": column.media_type, "url": value}

    if column.options is not None:
        registry = registry or EnumRegistry()
        return registry.label_for(column.options, value)

    if column.is_actions:
        return column.visible_actions(row)
    return value
