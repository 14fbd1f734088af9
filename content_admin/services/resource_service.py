from typing import Any, List, Mapping

from ..core.field_mapping import RESOURCE_FIELDS
from ..core.validation import require_fields
from .crud_service import CrudService


APPLICATION_CODES = ("PLAN", "WORKOUT")
GENDER_CODES = ("FEMALE", "MALE")


class ResourceService(CrudService):
    table_name = "resource"
    entity_name = "Resource"
    fields = RESOURCE_FIELDS
    searchable_fields = ("name", "description")
    filter_fields = {
        "statusList": "status",
        "applicationCodeList": "application_code",
        "genderCodeList": "gender_code",
    }

    def validate(self, data: Mapping[str, Any], is_draft: bool) -> List[str]:
        errors = require_fields(data, ["name"])
        application = data.get("applicationCode")
        if application is not None and application not in APPLICATION_CODES:
            errors.append("applicationCode is invalid")
        gender = data.get("genderCode")
        if gender is not None and gender not in GENDER_CODES:
            errors.append("genderCode is invalid")
        if is_draft:
            return errors

        errors.extend(require_fields(data, ("applicationCode", "genderCode", "coverImgUrl", "detailImgUrl")))
        return errors
