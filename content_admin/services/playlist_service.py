from collections import Counter
from typing import Any, Dict, List, Mapping, Optional

from supabase import Client

from ..core.field_mapping import MUSIC_FIELDS, PLAYLIST_FIELDS, PLAYLIST_MUSIC_FIELDS
from ..core.validation import require_fields
from .crud_service import CrudService
from .supabase_service import ChildRepository, TableRepository


PLAYLIST_TYPES = ("REGULAR", "YOGA", "DANCE")


class PlaylistService(CrudService):
    """Playlists own an ordered ``musicList`` stored in ``playlist_music``."""

    table_name = "playlist"
    entity_name = "Playlist"
    fields = PLAYLIST_FIELDS
    searchable_fields = ("name",)
    filter_fields = {
        "statusList": "status",
        "typeList": "type",
    }

    def __init__(self, client: Client):
        super().__init__(client)
        self.music = ChildRepository(client, "playlist_music", "playlist_id")
        self.tracks = TableRepository(client, "music", "Music")

    def validate(self, data: Mapping[str, Any], is_draft: bool) -> List[str]:
        errors = require_fields(data, ["name"])
        if data.get("premium") not in (0, 1):
            errors.append("premium must be 0 or 1")
        playlist_type = data.get("type")
        if playlist_type is not None and playlist_type not in PLAYLIST_TYPES:
            errors.append("type is invalid")

        music_list = data.get("musicList") or []
        if not isinstance(music_list, list):
            return errors + ["musicList must be a list"]
        if is_draft:
            return errors

        errors.extend(require_fields(data, ["type"]))
        for position, item in enumerate(music_list, start=1):
            if not isinstance(item, dict) or not isinstance(item.get("bizMusicId"), int):
                errors.append(f"musicList[{position}].bizMusicId must be an integer")
        return errors

    def after_save(self, record_id: int, data: Mapping[str, Any]) -> None:
        rows = [
            {"biz_music_id": item["bizMusicId"], "premium": int(item.get("premium") or 0)}
            for item in data.get("musicList") or []
            if isinstance(item, dict) and item.get("bizMusicId") is not None
        ]
        self.music.replace(record_id, rows)

    def decorate_rows(self, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        counts = Counter(row["playlist_id"] for row in self.music.list_for([r["id"] for r in records]))
        for record in records:
            record["musicCount"] = counts.get(record["id"], 0)
        return records

    def decorate_detail(self, record: Dict[str, Any]) -> Dict[str, Any]:
        links = self.music.list_for([record["id"]])
        tracks = {row["id"]: row for row in self.tracks.get_many(link["biz_music_id"] for link in links)}
        record["musicList"] = [self._music_item(link, tracks.get(link["biz_music_id"])) for link in links]
        return record

    @staticmethod
    def _music_item(link: Mapping[str, Any], track: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Link row joined with its music; a deleted or missing track leaves the music fields empty."""
        track = track or {}
        item = PLAYLIST_MUSIC_FIELDS.to_frontend_record(
            {key: link.get(key) for key in ("biz_music_id", "premium", "sort_order")}
        )
        item.update(MUSIC_FIELDS.to_frontend_record(
            {key: track.get(key) for key in ("name", "display_name", "audio_url", "audio_duration")}
        ))
        item["musicStatus"] = track.get("status")
        item["id"] = link["biz_music_id"]
        return item
