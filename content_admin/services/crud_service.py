import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from supabase import Client

from ..core.errors import NAME_EXISTS, ApiError, invalid, not_found
from ..core.field_mapping import FieldMapping
from ..core.responses import success_page
from ..core.validation import (
    is_digits,
    normalize_direction,
    split_list_param,
    validate_id_list,
    validate_order_field,
    validate_page,
    validate_record_id,
    validate_status,
)
from .supabase_service import TableRepository


logger = logging.getLogger(__name__)

_READ_ONLY_FIELDS = ("id", "createTime", "updateTime")


class CrudService:
    """Page/detail/save/enable/disable/delete over one soft-deleted table.

    Subclasses declare the table, its field mapping, searchable columns and
    the filter query keys they accept, and override ``validate`` with the
    module's rules.
    """

    table_name: str = ""
    entity_name: str = ""
    fields: FieldMapping
    searchable_fields: Sequence[str] = ("name",)
    # query parameter -> backend column
    filter_fields: Mapping[str, str] = {"statusList": "status"}
    default_order_by: str = "id"
    default_direction: str = "DESC"
    unique_name: bool = True

    def __init__(self, client: Client):
        self.client = client
        self.repo = TableRepository(client, self.table_name, self.entity_name)

    # -- reads ---------------------------------------------------------------

    def page(self, query: Mapping[str, Any]) -> Dict[str, Any]:
        page_index, page_size = validate_page(query.get("pageIndex"), query.get("pageSize"))
        order_field = validate_order_field(query.get("orderBy") or self.default_order_by)
        direction = normalize_direction(query.get("orderDirection") or self.default_direction)

        filters = {}
        for key, column in self.filter_fields.items():
            values = split_list_param(query.get(key))
            if values:
                filters[column] = values

        keywords = (query.get("keywords") or "").strip()
        id_match = None
        if keywords and is_digits(keywords) and self.repo.exists(int(keywords)):
            id_match = int(keywords)

        rows, total = self.repo.page(
            filters=filters,
            keywords=keywords or None,
            keyword_columns=self.searchable_fields,
            id_match=id_match,
            order_by=self.fields.to_backend(order_field),
            descending=direction == "DESC",
            page_index=page_index,
            page_size=page_size,
        )
        records = self.fields.to_frontend_rows(rows)
        return success_page(self.decorate_rows(records), total, page_index, page_size)

    def detail(self, record_id: Any) -> Dict[str, Any]:
        row = self.repo.get(validate_record_id(record_id))
        if row is None:
            raise not_found(self.entity_name)
        return self.decorate_detail(self.fields.to_frontend_record(row))

    def decorate_rows(self, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return records

    def decorate_detail(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return record

    # -- writes --------------------------------------------------------------

    def validate(self, data: Mapping[str, Any], is_draft: bool) -> List[str]:
        return []

    def writable_fields(self) -> List[str]:
        return [f for f in self.fields.supported_fields() if f not in _READ_ONLY_FIELDS]

    def prepare_record(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        record = {field: data[field] for field in self.writable_fields() if field in data}
        return self.fields.to_backend_record(record)

    def after_save(self, record_id: int, data: Mapping[str, Any]) -> None:
        pass

    def save(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        record_id: Optional[int] = validate_record_id(data["id"]) if data.get("id") else None
        status = data.get("status")
        validate_status(status)

        errors = self.validate(data, is_draft=status == "DRAFT")
        if errors:
            raise invalid(", ".join(errors))

        name = data.get("name")
        if self.unique_name and name and self.repo.name_exists(name, exclude_id=record_id):
            raise ApiError(NAME_EXISTS, f"{self.entity_name} name already exists")

        record = self.prepare_record(data)
        previous = None
        if record_id:
            previous = self.repo.get(record_id)
            if previous is None or self.repo.update(record_id, record) is None:
                raise not_found(self.entity_name)
            logger.info(f"Updated {self.table_name} {record_id}")
        else:
            record_id = self.repo.insert(record)["id"]
            logger.info(f"Created {self.table_name} {record_id}")

        try:
            self.after_save(record_id, data)
        except ApiError:
            self._undo_save(record_id, record, previous)
            raise
        return {"id": record_id}

    def _undo_save(self, record_id: int, record: Mapping[str, Any], previous: Optional[Mapping[str, Any]]) -> None:
        """Put the parent row back after its dependent writes failed."""
        try:
            if previous is None:
                self.repo.soft_delete([record_id])
            else:
                self.repo.update(record_id, {column: previous.get(column) for column in record})
            logger.warning(f"Reverted {self.table_name} {record_id} after a failed save")
        except ApiError as e:
            logger.error(f"Could not revert {self.table_name} {record_id}: {e.message}")

    def enable(self, id_list: Any) -> Dict[str, Any]:
        return {"updatedCount": self.repo.update_many(validate_id_list(id_list), {"status": "ENABLED"})}

    def disable(self, id_list: Any) -> Dict[str, Any]:
        return {"updatedCount": self.repo.update_many(validate_id_list(id_list), {"status": "DISABLED"})}

    def delete(self, id_list: Any) -> Dict[str, Any]:
        ids = validate_id_list(id_list)
        deleted = self.repo.soft_delete(ids)
        logger.info(f"Soft deleted {deleted} {self.table_name} rows")
        return {"deletedCount": deleted}
