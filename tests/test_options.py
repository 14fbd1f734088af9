from content_admin.admin import EnumRegistry, OptionItem
from content_admin.services.enum_service import list_enums


def test_static_sets_are_seeded():
    registry = EnumRegistry()
    assert [item.value for item in registry.resolve("statusList")] == ["DRAFT", "ENABLED", "DISABLED"]
    assert registry.label_for("defaultStatus", 0) == "No"


def test_unknown_names_resolve_to_empty_list():
    registry = EnumRegistry()
    assert registry.resolve("BizNothingEnums") == []
    assert registry.resolve(None) == []
    assert registry.label_for("BizNothingEnums", "X") == "X"


def test_load_enum_groups_uses_enum_name_and_display_name():
    registry = EnumRegistry(seed={})
    loaded = registry.load_enum_groups(list_enums())

    assert loaded == len(list_enums())
    assert registry.resolve("BizPlaylistTypeEnums") == [
        OptionItem("REGULAR", "Regular"),
        OptionItem("YOGA", "Yoga"),
        OptionItem("DANCE", "Dance"),
    ]
    assert "statusList" not in registry.names()


def test_register_normalises_dict_items():
    registry = EnumRegistry()
    registry.register("level", [{"value": 1, "label": "Easy"}, {"value": 2, "name": "Hard"}, {"value": 3}])
    assert registry.resolve("level") == [OptionItem(1, "Easy"), OptionItem(2, "Hard"), OptionItem(3, "3")]


def test_groups_without_a_name_are_skipped():
    registry = EnumRegistry(seed={})
    assert registry.load_enum_groups([{"datas": []}]) == 0
    assert registry.names() == []
