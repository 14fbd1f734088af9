import pytest

from content_admin.admin import ColumnDescriptor, EnumRegistry, FilterSection, default_is_button_visible
from content_admin.admin.columns import missing_fields, render_cell
from content_admin.services.enum_service import list_enums


@pytest.mark.parametrize("status, button, expected", [
    ("DRAFT", "edit", True),
    ("DRAFT", "duplicate", True),
    ("DRAFT", "delete", True),
    ("DRAFT", "enable", False),
    ("DRAFT", "disable", False),
    ("DISABLED", "enable", True),
    ("DISABLED", "delete", True),
    ("DISABLED", "disable", False),
    ("ENABLED", "disable", True),
    ("ENABLED", "delete", False),
    ("ENABLED", "enable", False),
    ("ARCHIVED", "edit", False),
    (None, "edit", False),
])
def test_status_button_matrix(status, button, expected):
    assert default_is_button_visible({"status": status}, button) is expected


def test_actions_column_is_pinned_right():
    column = ColumnDescriptor(title="Actions", data_index="actions", action_buttons=("edit",), width=300)
    assert (column.width, column.fixed, column.align) == (70, "right", "center")
    assert column.always_visible


def test_custom_is_show_predicate_overrides_matrix():
    column = ColumnDescriptor(
        title="Actions",
        data_index="actions",
        action_buttons=("edit", "delete"),
        is_show=lambda row, button: button == "edit" or row.get("id") == 1,
    )
    assert column.visible_actions({"id": 1, "status": "ENABLED"}) == ["edit", "delete"]
    assert column.visible_actions({"id": 2, "status": "DRAFT"}) == ["edit"]


def test_unknown_media_type_is_rejected():
    with pytest.raises(ValueError):
        ColumnDescriptor(title="Doc", data_index="docUrl", media_type="pdf")


def test_filter_mode_must_be_single_or_multiple():
    with pytest.raises(ValueError):
        FilterSection(title="Status", key="statusList", mode="range")


def test_inline_render_wins_over_everything():
    column = ColumnDescriptor(
        title="Status",
        data_index="status",
        options="displayStatus",
        render_name="renderNameColumn",
        render=lambda value, row: value.lower(),
    )
    assert render_cell(column, {"id": 1, "status": "ENABLED"}) == "enabled"


def test_named_renderer_wins_over_options():
    column = ColumnDescriptor(title="Premium", data_index="premium", render_name="renderSwitchColumn",
                              options="defaultStatus")
    assert render_cell(column, {"premium": 1}) is True


def test_custom_named_renderers_are_used():
    column = ColumnDescriptor(title="Name", data_index="name", render_name="shout")
    assert render_cell(column, {"name": "rain"}, renderers={"shout": lambda v, row: v.upper()}) == "RAIN"


def test_option_labels_come_from_enum_registry():
    registry = EnumRegistry()
    registry.load_enum_groups(list_enums())
    column = ColumnDescriptor(title="Gender", data_index="genderCode", options="BizSoundGenderEnums")

    assert render_cell(column, {"genderCode": "FEMALE_AND_MALE"}, registry) == "Female & Male"
    assert render_cell(column, {"genderCode": ["FEMALE", "MALE"]}, registry) == "Female, Male"
    assert render_cell(column, {"genderCode": "OTHER"}, registry) == "OTHER"


def test_inline_option_lists_are_accepted():
    column = ColumnDescriptor(title="Show", data_index="showInPage",
                              options=[{"value": 1, "label": "Yes"}, {"value": 0, "name": "No"}])
    assert render_cell(column, {"showInPage": 0}) == "No"


def test_plain_columns_return_raw_value():
    column = ColumnDescriptor(title="Duration", data_index="audioDuration")
    assert render_cell(column, {"audioDuration": 90}) == 90


def test_missing_fields_reports_rows_without_data():
    columns = [
        ColumnDescriptor(title="Name", data_index="name"),
        ColumnDescriptor(title="Audio", data_index="audioUrl"),
        ColumnDescriptor(title="Actions", data_index="actions", action_buttons=("edit",)),
    ]
    rows = [{"id": 1, "name": "a", "audioUrl": "x"}, {"id": 2, "name": "b"}]
    assert missing_fields(rows, columns) == {"audioUrl": [2]}
