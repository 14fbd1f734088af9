from typing import Any, List, Mapping

from ..core.field_mapping import PLAN_NAME_SETTINGS_FIELDS
from ..core.validation import require_fields
from .crud_service import CrudService


RULE_KEYS = ("matchKey", "matchCondition")


class PlanNameSettingsService(CrudService):
    table_name = "plan_name_settings"
    entity_name = "Plan name settings"
    fields = PLAN_NAME_SETTINGS_FIELDS
    searchable_fields = ("name", "plan_name")

    def validate(self, data: Mapping[str, Any], is_draft: bool) -> List[str]:
        errors = require_fields(data, ["name"])

        rules = data.get("ruleList") or []
        if not isinstance(rules, list):
            return errors + ["ruleList must be a list"]
        if is_draft:
            return errors

        errors.extend(require_fields(data, ["planName"]))
        for position, rule in enumerate(rules, start=1):
            if not isinstance(rule, dict) or any(not rule.get(key) for key in RULE_KEYS):
                errors.append(f"ruleList[{position}] needs matchKey and matchCondition")
        return errors

    def prepare_record(self, data: Mapping[str, Any]):
        record = super().prepare_record(data)
        record["rule_list"] = list(data.get("ruleList") or [])
        return record
