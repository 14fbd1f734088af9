from typing import Any, List, Mapping

from ..core.field_mapping import MUSIC_FIELDS
from .crud_service import CrudService


class MusicService(CrudService):
    table_name = "music"
    entity_name = "Music"
    fields = MUSIC_FIELDS
    searchable_fields = ("name", "display_name")

    def validate(self, data: Mapping[str, Any], is_draft: bool) -> List[str]:
        errors = []
        if not isinstance(data.get("name"), str) or not data["name"].strip():
            errors.append("name is required")
        if not isinstance(data.get("displayName"), str) or not data["displayName"].strip():
            errors.append("displayName is required")

        duration = data.get("audioDuration")
        if not is_draft and duration is not None:
            if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
                errors.append("audioDuration must be a positive integer")
        return errors

    def prepare_record(self, data: Mapping[str, Any]):
        record = super().prepare_record(data)
        record.setdefault("audio_duration", 0)
        return record
