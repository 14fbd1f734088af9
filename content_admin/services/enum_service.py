"""Static business enums served to admin clients by ``GET /enum/list``."""

from typing import Any, Dict, List, Optional, Sequence, Tuple


def _group(name: str, items: Sequence[Tuple[int, str, str]]) -> Dict[str, Any]:
    return {
        "name": name,
        "displayName": name,
        "datas": [
            {"code": code, "name": label, "displayName": label, "enumName": enum_name}
            for code, label, enum_name in items
        ],
    }


ENUM_GROUPS: List[Dict[str, Any]] = [
    _group("BizCategoryGroupEnums", [
        (1, "Group A", "GROUPA"),
        (2, "Group B", "GROUPB"),
        (3, "Group C", "GROUPC"),
        (4, "Group D", "GROUPD"),
        (5, "Group E", "GROUPE"),
        (6, "Group F", "GROUPF"),
        (7, "Group G", "GROUPG"),
    ]),
    _group("BizPlanGenderEnums", [
        (1, "Female", "FEMALE"),
        (2, "Male", "MALE"),
    ]),
    _group("BizPlanNameSettingsRuleMatchConditionEnums", [
        (1, "is equal to", "EQUALS"),
        (2, "is not equal to", "NOT_EQUALS"),
    ]),
    _group("BizPlanNameSettingsRuleMatchKeyEnums", [
        (1, "Wished training position", "WISHED_TRAINING_POSITION"),
        (2, "Completed Times", "COMPLETED_TIMES"),
    ]),
    _group("BizPlaylistTypeEnums", [
        (1, "Regular", "REGULAR"),
        (2, "Yoga", "YOGA"),
        (3, "Dance", "DANCE"),
    ]),
    _group("BizResourceApplicationEnums", [
        (1, "Plan", "PLAN"),
        (2, "Workout", "WORKOUT"),
    ]),
    _group("BizSoundGenderEnums", [
        (1, "Female", "FEMALE"),
        (2, "Male", "MALE"),
        (3, "Female & Male", "FEMALE_AND_MALE"),
    ]),
    _group("BizSoundUsageEnums", [
        (1, "Flow", "FLOW"),
        (2, "General", "GENERAL"),
    ]),
]


def list_enums() -> List[Dict[str, Any]]:
    return ENUM_GROUPS


def find_enum(name: str) -> Optional[Dict[str, Any]]:
    for group in ENUM_GROUPS:
        if group["name"] == name:
            return group
    return None
