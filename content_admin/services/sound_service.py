from typing import Any, List, Mapping

from ..core.field_mapping import SOUND_FIELDS
from ..core.validation import require_fields
from .crud_service import CrudService


GENDER_CODES = ("FEMALE", "MALE", "FEMALE_AND_MALE")
USAGE_CODES = ("FLOW", "GENERAL")


def _has_duration(value: Any) -> bool:
    return value is not None and value != ""


class SoundService(CrudService):
    table_name = "sound"
    entity_name = "Sound"
    fields = SOUND_FIELDS
    searchable_fields = ("name",)
    filter_fields = {
        "statusList": "status",
        "genderCodeList": "gender_code",
        "usageCodeList": "usage_code",
    }

    def validate(self, data: Mapping[str, Any], is_draft: bool) -> List[str]:
        errors = require_fields(data, ["name"])

        gender = data.get("genderCode")
        if gender is not None and gender not in GENDER_CODES:
            errors.append("genderCode is invalid")
        usage = data.get("usageCode")
        if usage is not None and usage not in USAGE_CODES:
            errors.append("usageCode is invalid")
        translation = data.get("translation")
        if translation is not None and translation not in (0, 1):
            errors.append("translation is invalid")

        if is_draft:
            return errors

        errors.extend(require_fields(data, ("genderCode", "usageCode", "translation")))

        wants_female = gender in ("FEMALE", "FEMALE_AND_MALE")
        wants_male = gender in ("MALE", "FEMALE_AND_MALE")
        if wants_female:
            if not data.get("femaleAudioUrl"):
                errors.append("femaleAudioUrl is required")
            if not _has_duration(data.get("femaleAudioDuration")):
                errors.append("femaleAudioDuration is required")
        if wants_male:
            if not data.get("maleAudioUrl"):
                errors.append("maleAudioUrl is required")
            if not _has_duration(data.get("maleAudioDuration")):
                errors.append("maleAudioDuration is required")

        if translation == 1:
            if wants_female and not data.get("femaleScript"):
                errors.append("femaleScript is required")
            if wants_male and not data.get("maleScript"):
                errors.append("maleScript is required")
        return errors
