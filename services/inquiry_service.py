# services/inquiry_service.py

"""
Inquiry persistence on top of the Supabase (PostgREST) client.

Every function takes the client as its first argument so routers decide
where it comes from and tests can hand in a fake. Failures are raised as
the core.errors taxonomy; nothing here knows about HTTP.
"""

import re
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError
from supabase import Client

from core.config import settings
from core.errors import (
    NoOpError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    handle_supabase_error,
)
from core.logging_config import logger
from core.utils import blank_to_none, is_blank, utc_now_iso
from models.enums import (
    FILTER_ALL,
    InquiryPriority,
    InquiryStatus,
    ServiceCategory,
)
from models.inquiry import (
    ALLOWED_UPDATE_FIELDS,
    NULLABLE_UPDATE_FIELDS,
    REQUIRED_CREATE_FIELDS,
    InquiryCreate,
    InquiryUpdate,
)

# UUID pattern for validation
UUID_PATTERN = re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$', re.IGNORECASE)

# Column -> enum used to decide whether a filter value can match anything.
FILTER_COLUMNS = {
    "status": InquiryStatus,
    "category": ServiceCategory,
    "priority": InquiryPriority,
}


def is_uuid(identifier: str) -> bool:
    """Check if a string is a valid UUID format."""
    return bool(UUID_PATTERN.match(identifier or ""))


def _table(client: Optional[Client]):
    if client is None:
        raise PersistenceError("Database client not configured")
    return client.table(settings.INQUIRIES_TABLE)


def _validation_message(exc: PydanticValidationError) -> Tuple[str, Optional[str]]:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    if field:
        return f"Invalid value for field: {field}", field
    return "Invalid request", None


# ============================================================
# CREATE
# ============================================================
def create_inquiry(client: Client, payload: Union[InquiryCreate, Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Insert a new inquiry from the public form.

    Required fields are checked in REQUIRED_CREATE_FIELDS order and the
    first missing one is reported. Status always starts as "new" and the
    priority comes from settings; callers cannot choose either.
    """
    if isinstance(payload, InquiryCreate):
        raw = payload.model_dump(mode="json")
    else:
        raw = dict(payload)

    # Presence is checked before any value so a missing field wins.
    for field in REQUIRED_CREATE_FIELDS:
        if is_blank(raw.get(field)):
            raise ValidationError.missing_field(field)

    try:
        parsed = InquiryCreate.model_validate(raw)
    except PydanticValidationError as e:
        message, field = _validation_message(e)
        raise ValidationError(message, field=field) from e

    data = blank_to_none(parsed.model_dump(mode="json"))

    row = {
        "name": data["name"],
        "email": data["email"],
        "phone": data["phone"],
        "state": data["state"],
        "city": data["city"],
        "area": data.get("area"),
        "category": data["category"],
        "subcategory": data.get("subcategory"),
        "budget_range": data.get("budget_range"),
        "timeline": data.get("timeline"),
        "description": data["description"],
        "special_requirements": data.get("special_requirements"),
        "documents": data.get("documents") or [],
        "status": InquiryStatus.new.value,
        "priority": settings.DEFAULT_INQUIRY_PRIORITY,
    }

    table = _table(client)
    try:
        result = table.insert(row, returning="representation").execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to submit inquiry") from e

    if not result.data:
        raise PersistenceError("Failed to submit inquiry")

    inquiry = result.data[0]
    logger.info(
        f"Inquiry {inquiry.get('id')} created ({row['category']}, {row['city']}, {row['state']})"
    )
    return inquiry


# ============================================================
# LIST
# ============================================================
def list_inquiries(
    client: Client,
    status: Optional[str] = None,
    category: Optional[str] = None,
    priority: Optional[str] = None,
    limit: int = None,
    offset: int = 0,
) -> Tuple[List[Dict[str, Any]], int]:
    """
    Return one page of inquiries (newest first) and the total match count.

    Each filter is either absent, the "all" sentinel, or a value compared
    with equality; filters combine with AND. A value outside its enum can
    never match a row, so the store is not queried at all in that case.
    """
    if limit is None:
        limit = settings.DEFAULT_PAGE_SIZE

    filters = {}
    for column, value in (("status", status), ("category", category), ("priority", priority)):
        if value is None or value == "" or value == FILTER_ALL:
            continue
        if not FILTER_COLUMNS[column].has_value(value):
            logger.debug(f"Filter {column}={value!r} matches nothing")
            return [], 0
        filters[column] = value

    table = _table(client)
    try:
        query = table.select("*", count="exact")
        for column, value in filters.items():
            query = query.eq(column, value)

        result = (
            query.order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch inquiries") from e

    inquiries = result.data or []
    total = result.count if result.count is not None else len(inquiries)
    return inquiries, total


# ============================================================
# GET ONE
# ============================================================
def get_inquiry(client: Client, inquiry_id: str) -> Dict[str, Any]:
    if not is_uuid(inquiry_id):
        raise NotFoundError()

    table = _table(client)
    try:
        result = table.select("*").eq("id", inquiry_id).limit(1).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch inquiry") from e

    if not result.data:
        raise NotFoundError()

    return result.data[0]


# ============================================================
# UPDATE (merge-patch)
# ============================================================
def build_update_patch(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Reduce an arbitrary payload to the allow-listed, validated patch.

    Keys outside ALLOWED_UPDATE_FIELDS are dropped silently. Invalid
    status/priority values raise ValidationError. A null status or
    priority is dropped; a null assignee or note clears it.
    """
    subset = {k: v for k, v in changes.items() if k in ALLOWED_UPDATE_FIELDS}

    try:
        parsed = InquiryUpdate.model_validate(subset)
    except PydanticValidationError as e:
        message, field = _validation_message(e)
        raise ValidationError(message, field=field) from e

    values = parsed.model_dump(mode="json")
    return {
        key: values[key]
        for key in subset
        if values[key] is not None or key in NULLABLE_UPDATE_FIELDS
    }


def update_inquiry(client: Client, inquiry_id: str, changes: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Apply an admin merge-patch and return the stored row.

    Raises NoOpError before touching the store when nothing on the
    allow-list is present. Concurrent edits are last-write-wins.
    """
    patch = build_update_patch(changes)
    if not patch:
        raise NoOpError()

    if not is_uuid(inquiry_id):
        raise NotFoundError()

    patch["updated_at"] = utc_now_iso()

    table = _table(client)
    try:
        result = table.update(patch).eq("id", inquiry_id).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to update inquiry") from e

    if not result.data:
        raise NotFoundError()

    changed = ", ".join(f"{k}={v!r}" for k, v in patch.items() if k != "updated_at")
    logger.info(f"Inquiry {inquiry_id} updated: {changed}")
    return result.data[0]
