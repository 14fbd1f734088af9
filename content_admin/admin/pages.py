"""Column and filter configuration for each module list."""

from typing import Any, Dict, List

from .columns import ColumnDescriptor, FilterSection, VisibleColumn
from .options import STATIC_OPTION_SETS
from .table import ListLoader, TableController


ROW_ACTIONS = ("edit", "duplicate", "enable", "disable", "delete")

STATUS_FILTER = FilterSection(title="Status", key="statusList", options=STATIC_OPTION_SETS["statusList"])


def _actions() -> ColumnDescriptor:
    return ColumnDescriptor(title="Actions", data_index="actions", action_buttons=ROW_ACTIONS)


def _name() -> ColumnDescriptor:
    return ColumnDescriptor(title="Name", data_index="name", sortable=True, render_name="renderNameColumn")


def _status() -> ColumnDescriptor:
    return ColumnDescriptor(title="Status", data_index="status", sortable=True, options="displayStatus")


def _has_script(value: Any, row: Dict[str, Any]) -> bool:
    return bool(row.get("translation"))


MODULE_COLUMNS: Dict[str, List[ColumnDescriptor]] = {
    "sound": [
        _name(),
        _status(),
        ColumnDescriptor(title="Usage", data_index="usageCode", sortable=True, options="BizSoundUsageEnums"),
        ColumnDescriptor(title="Has a Script", data_index="translation", width=150, sortable=True, render=_has_script),
        ColumnDescriptor(title="Female Audio", data_index="femaleAudioUrl", media_type="audio", width=240,
                         visible_column=VisibleColumn.SHOWN),
        ColumnDescriptor(title="Male Audio", data_index="maleAudioUrl", media_type="audio", width=240,
                         visible_column=VisibleColumn.SHOWN),
        ColumnDescriptor(title="Gender", data_index="genderCode", options="BizSoundGenderEnums",
                         visible_column=VisibleColumn.HIDDEN),
        _actions(),
    ],
    "music": [
        _name(),
        ColumnDescriptor(title="Display Name", data_index="displayName", sortable=True),
        ColumnDescriptor(title="Audio", data_index="audioUrl", media_type="audio", width=240),
        ColumnDescriptor(title="Duration", data_index="audioDuration", sortable=True,
                         visible_column=VisibleColumn.SHOWN),
        _status(),
        _actions(),
    ],
    "playlist": [
        _name(),
        ColumnDescriptor(title="Type", data_index="type", sortable=True, options="BizPlaylistTypeEnums"),
        ColumnDescriptor(title="Premium", data_index="premium", render_name="renderSwitchColumn"),
        ColumnDescriptor(title="Music Count", data_index="musicCount", visible_column=VisibleColumn.SHOWN),
        _status(),
        _actions(),
    ],
    "category": [
        ColumnDescriptor(title="Cover Image", data_index="coverImgUrl", media_type="image"),
        ColumnDescriptor(title="Detail Image", data_index="detailImgUrl", media_type="image",
                         visible_column=VisibleColumn.HIDDEN),
        _name(),
        ColumnDescriptor(title="Group", data_index="groupCode", options="BizCategoryGroupEnums",
                         visible_column=VisibleColumn.SHOWN),
        ColumnDescriptor(title="Show In Page", data_index="showInPage", render_name="renderSwitchColumn",
                         visible_column=VisibleColumn.SHOWN),
        _status(),
        _actions(),
    ],
    "resource": [
        _name(),
        ColumnDescriptor(title="Application", data_index="applicationCode", options="BizResourceApplicationEnums"),
        ColumnDescriptor(title="Gender", data_index="genderCode", options="BizPlanGenderEnums"),
        _status(),
        _actions(),
    ],
    "planNameSettings": [
        _name(),
        ColumnDescriptor(title="Plan Name", data_index="planName"),
        ColumnDescriptor(title="Description", data_index="description", visible_column=VisibleColumn.HIDDEN),
        ColumnDescriptor(title="Rules", data_index="ruleList", render=lambda value, row: len(value or [])),
        _status(),
        _actions(),
    ],
}

MODULE_FILTERS: Dict[str, List[FilterSection]] = {
    "sound": [
        STATUS_FILTER,
        FilterSection(title="Usage", key="usageCodeList", options="BizSoundUsageEnums"),
        FilterSection(title="Gender", key="genderCodeList", options="BizSoundGenderEnums"),
    ],
    "music": [STATUS_FILTER],
    "playlist": [
        STATUS_FILTER,
        FilterSection(title="Type", key="typeList", options="BizPlaylistTypeEnums"),
    ],
    "category": [
        STATUS_FILTER,
        FilterSection(title="Group", key="groupCodeList", options="BizCategoryGroupEnums"),
    ],
    "resource": [
        STATUS_FILTER,
        FilterSection(title="Application", key="applicationCodeList", options="BizResourceApplicationEnums"),
        FilterSection(title="Gender", key="genderCodeList", options="BizPlanGenderEnums"),
    ],
    "planNameSettings": [STATUS_FILTER],
}


def build_table(module_key: str, load_list: ListLoader, **kwargs: Any) -> TableController:
    if module_key not in MODULE_COLUMNS:
        raise KeyError(f"Unknown module: {module_key}")
    return TableController(
        MODULE_COLUMNS[module_key],
        load_list,
        module_key=module_key,
        filter_sections=MODULE_FILTERS.get(module_key, []),
        **kwargs,
    )
