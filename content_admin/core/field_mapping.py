"""Field-name mapping between admin (camelCase) and data store (snake_case) keys.

Explicit per-module tables win; anything not in a table degrades to the
generic case-convention transform instead of failing.
"""

import json
import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional


_UPPER = re.compile(r"[A-Z]")
_UNDERSCORE_LOWER = re.compile(r"_([a-z])")

_EXPLICIT_TIME_FIELDS = ("create_time", "update_time", "created_at", "updated_at")
_NUMERIC_TIME_MARKERS = ("start_time", "end_time", "duration")
_JSON_MARKERS = ("_ids", "_data", "_config", "_json")


def camel_to_snake(value: str) -> str:
    return _UPPER.sub(lambda m: "_" + m.group(0).lower(), value)


def snake_to_camel(value: str) -> str:
    return _UNDERSCORE_LOWER.sub(lambda m: m.group(1).upper(), value)


def to_backend_key(frontend_key: str, mapping: Optional[Mapping[str, str]] = None) -> str:
    if mapping and frontend_key in mapping:
        return mapping[frontend_key]
    return camel_to_snake(frontend_key)


def to_frontend_key(backend_key: str, mapping: Optional[Mapping[str, str]] = None) -> str:
    if mapping:
        for frontend, backend in mapping.items():
            if backend == backend_key:
                return frontend
    return snake_to_camel(backend_key)


def is_time_field(key: str) -> bool:
    """Return True for datetime columns, False for numeric offsets such as audio durations."""
    if key in _EXPLICIT_TIME_FIELDS or key in [snake_to_camel(k) for k in _EXPLICIT_TIME_FIELDS]:
        return True
    if any(marker in key for marker in _NUMERIC_TIME_MARKERS):
        return False
    return key.endswith("_time") or key.endswith("_at")


def format_date_time(value: Any) -> Any:
    if value is None or value == "":
        return value
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
        return parsed.strftime("%Y-%m-%d %H:%M:%S")
    return value


def _decode_json(key: str, value: Any) -> Any:
    if isinstance(value, str) and any(marker in key for marker in _JSON_MARKERS):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


class FieldMapping:
    """Module-scoped mapping table bound to the generic key converters."""

    def __init__(self, mapping: Mapping[str, str]):
        backend_keys = list(mapping.values())
        if len(set(backend_keys)) != len(backend_keys):
            raise ValueError("Field mapping backend keys must be unique")
        self._mapping: Dict[str, str] = dict(mapping)

    @property
    def table(self) -> Dict[str, str]:
        return dict(self._mapping)

    def to_backend(self, frontend_key: str) -> str:
        return to_backend_key(frontend_key, self._mapping)

    def to_frontend(self, backend_key: str) -> str:
        return to_frontend_key(backend_key, self._mapping)

    def supported_fields(self) -> List[str]:
        return list(self._mapping.keys())

    def is_supported(self, frontend_key: str) -> bool:
        return frontend_key in self._mapping

    def to_backend_record(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        return {self.to_backend(key): value for key, value in record.items()}

    def to_frontend_record(
        self,
        record: Mapping[str, Any],
        exclude: Iterable[str] = ("is_deleted",),
    ) -> Dict[str, Any]:
        excluded = set(exclude)
        converted: Dict[str, Any] = {}
        for key, value in record.items():
            if key in excluded:
                continue
            if value is not None and is_time_field(key):
                value = format_date_time(value)
            else:
                value = _decode_json(key, value)
            converted[self.to_frontend(key)] = value
        return converted

    def to_frontend_rows(self, rows: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        return [self.to_frontend_record(row) for row in rows]


SOUND_FIELD_MAPPING = {
    "id": "id",
    "name": "name",
    "genderCode": "gender_code",
    "usageCode": "usage_code",
    "status": "status",
    "createTime": "create_time",
    "updateTime": "update_time",
    "translation": "translation",
    "femaleAudioUrl": "female_audio_url",
    "femaleAudioDuration": "female_audio_duration",
    "maleAudioUrl": "male_audio_url",
    "maleAudioDuration": "male_audio_duration",
    "femaleScript": "female_script",
    "maleScript": "male_script",
}

MUSIC_FIELD_MAPPING = {
    "id": "id",
    "name": "name",
    "displayName": "display_name",
    "audioUrl": "audio_url",
    "audioDuration": "audio_duration",
    "status": "status",
    "createTime": "create_time",
    "updateTime": "update_time",
}

PLAYLIST_FIELD_MAPPING = {
    "id": "id",
    "name": "name",
    "type": "type",
    "premium": "premium",
    "status": "status",
    "createTime": "create_time",
    "updateTime": "update_time",
}

PLAYLIST_MUSIC_FIELD_MAPPING = {
    "id": "id",
    "playlistId": "playlist_id",
    "bizMusicId": "biz_music_id",
    "premium": "premium",
    "sortOrder": "sort_order",
}

CATEGORY_FIELD_MAPPING = {
    "id": "id",
    "name": "name",
    "coverImgUrl": "cover_img_url",
    "detailImgUrl": "detail_img_url",
    "description": "description",
    "newStartTime": "new_start_time",
    "newEndTime": "new_end_time",
    "groupCode": "group_code",
    "showInPage": "show_in_page",
    "sort": "sort",
    "status": "status",
    "createTime": "create_time",
    "updateTime": "update_time",
}

RESOURCE_FIELD_MAPPING = {
    "id": "id",
    "name": "name",
    "description": "description",
    "applicationCode": "application_code",
    "genderCode": "gender_code",
    "coverImgUrl": "cover_img_url",
    "detailImgUrl": "detail_img_url",
    "status": "status",
    "createTime": "create_time",
    "updateTime": "update_time",
}

PLAN_NAME_SETTINGS_FIELD_MAPPING = {
    "id": "id",
    "name": "name",
    "description": "description",
    "planName": "plan_name",
    "stage1Name": "stage1_name",
    "stage2Name": "stage2_name",
    "stage3Name": "stage3_name",
    "stage4Name": "stage4_name",
    "ruleList": "rule_list",
    "status": "status",
    "createTime": "create_time",
    "updateTime": "update_time",
}

SOUND_FIELDS = FieldMapping(SOUND_FIELD_MAPPING)
MUSIC_FIELDS = FieldMapping(MUSIC_FIELD_MAPPING)
PLAYLIST_FIELDS = FieldMapping(PLAYLIST_FIELD_MAPPING)
PLAYLIST_MUSIC_FIELDS = FieldMapping(PLAYLIST_MUSIC_FIELD_MAPPING)
CATEGORY_FIELDS = FieldMapping(CATEGORY_FIELD_MAPPING)
RESOURCE_FIELDS = FieldMapping(RESOURCE_FIELD_MAPPING)
PLAN_NAME_SETTINGS_FIELDS = FieldMapping(PLAN_NAME_SETTINGS_FIELD_MAPPING)
