import logging
from typing import Any, Dict, List, Mapping

from ..core.field_mapping import CATEGORY_FIELDS
from ..core.validation import require_fields, validate_id_list
from .crud_service import CrudService


logger = logging.getLogger(__name__)


class CategoryService(CrudService):
    """Categories are listed in their manual ``sort`` order rather than by id."""

    table_name = "category"
    entity_name = "Category"
    fields = CATEGORY_FIELDS
    searchable_fields = ("name",)
    filter_fields = {
        "statusList": "status",
        "groupCodeList": "group_code",
    }
    default_order_by = "sort"
    default_direction = "ASC"

    def validate(self, data: Mapping[str, Any], is_draft: bool) -> List[str]:
        errors = require_fields(data, ["name"])
        if not is_draft:
            start, end = data.get("newStartTime"), data.get("newEndTime")
            if start and end and str(start) > str(end):
                errors.append("newStartTime must not be after newEndTime")
        return errors

    def list_all(self) -> List[Dict[str, Any]]:
        return self.fields.to_frontend_rows(self.repo.list_all(order_by="sort"))

    def sort(self, id_list: Any) -> Dict[str, Any]:
        """Persist the given id order as ``sort`` 1..n."""
        ids = validate_id_list(id_list)
        updated = 0
        for position, record_id in enumerate(ids, start=1):
            updated += self.repo.update_many([record_id], {"sort": position})
        logger.info(f"Re-sorted {updated} categories")
        return {"updatedCount": updated}
