# portal/dashboard.py

"""
Admin dashboard state: server-filtered list, in-page text search,
master/detail selection and triage updates.

The two narrowing stages stay separate: filters go to the API and
trigger a re-fetch, `filter_by_text` only looks at the page already
loaded.
"""

import csv
from typing import Any, Dict, Iterable, List, Optional, TextIO

from core.errors import InquiryError, ValidationError
from core.logging_config import logger
from models.enums import FILTER_ALL, InquiryPriority, InquiryStatus, ServiceCategory
from portal.api_client import InquiryApiClient

# Matched case-insensitively; phone is matched as typed.
SEARCH_FIELDS = ("name", "email", "id", "city", "state")

EXPORT_COLUMNS = (
    "id", "created_at", "status", "priority", "name", "email", "phone",
    "state", "city", "area", "category", "subcategory", "budget_range",
    "timeline", "description", "special_requirements", "assigned_to", "admin_notes",
)


def filter_by_text(records: Iterable[Dict[str, Any]], term: str) -> List[Dict[str, Any]]:
    """Records whose name, email, phone, id, city or state contain `term`."""
    records = list(records)
    if not term:
        return records

    needle = term.lower()
    matches = []
    for record in records:
        if term in str(record.get("phone") or ""):
            matches.append(record)
            continue
        if any(needle in str(record.get(f) or "").lower() for f in SEARCH_FIELDS):
            matches.append(record)
    return matches


def replace_by_id(records: List[Dict[str, Any]], updated: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [updated if r.get("id") == updated.get("id") else r for r in records]


class AdminDashboard:
    def __init__(self, api: InquiryApiClient):
        self.api = api

        self.inquiries: List[Dict[str, Any]] = []
        self.total = 0
        self.status_filter = FILTER_ALL
        self.category_filter = FILTER_ALL
        self.priority_filter = FILTER_ALL
        self.search_term = ""

        self.selected: Optional[Dict[str, Any]] = None
        self.notes_text = ""

        self.is_loading = False
        self.is_updating = False
        self.error: Optional[str] = None
        self.update_error: Optional[str] = None

    # -------------------------------------------------
    # Loading
    # -------------------------------------------------
    def fetch(self) -> bool:
        """Reload the page for the current filters. False on failure."""
        self.is_loading = True
        self.error = None
        try:
            response = self.api.list_inquiries(
                status=self.status_filter,
                category=self.category_filter,
                priority=self.priority_filter,
            )
        except InquiryError as e:
            logger.warning(f"Failed to load inquiries: {e.message}")
            self.error = e.message
            return False
        finally:
            self.is_loading = False

        self.inquiries = response.get("inquiries") or []
        self.total = response.get("total") or 0
        if self.selected is not None:
            fresh = [i for i in self.inquiries if i.get("id") == self.selected.get("id")]
            self.selected = fresh[0] if fresh else self.selected
        return True

    refresh = fetch
    retry = fetch

    def set_filters(self, status: str = None, category: str = None, priority: str = None) -> bool:
        """
        Change any of the server-side filters and re-fetch.

        Raises ValueError for a value outside its enum; no filter is
        changed in that case.
        """
        requested = (
            ("status_filter", status, InquiryStatus),
            ("category_filter", category, ServiceCategory),
            ("priority_filter", priority, InquiryPriority),
        )
        for _, value, enum in requested:
            if value is not None and value != FILTER_ALL:
                enum(value)

        for attr, value, _ in requested:
            if value is not None:
                setattr(self, attr, value)
        return self.fetch()

    def set_search(self, term: str):
        self.search_term = term or ""

    @property
    def visible(self) -> List[Dict[str, Any]]:
        return filter_by_text(self.inquiries, self.search_term)

    @property
    def stats(self) -> Dict[str, int]:
        # Counted over the loaded page, like the list itself.
        def count(status):
            return sum(1 for i in self.inquiries if i.get("status") == status)

        return {
            "total": len(self.inquiries),
            "new": count(InquiryStatus.new.value),
            "in_progress": count(InquiryStatus.in_progress.value),
            "completed": count(InquiryStatus.completed.value),
        }

    # -------------------------------------------------
    # Detail pane
    # -------------------------------------------------
    def select(self, inquiry_id: str) -> Dict[str, Any]:
        for inquiry in self.inquiries:
            if inquiry.get("id") == inquiry_id:
                self.selected = inquiry
                self.notes_text = inquiry.get("admin_notes") or ""
                self.update_error = None
                return inquiry
        raise KeyError(f"Inquiry {inquiry_id} is not in the loaded page")

    def clear_selection(self):
        self.selected = None
        self.notes_text = ""

    # -------------------------------------------------
    # Updates
    # -------------------------------------------------
    def update(self, inquiry_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Send a patch and merge the server's record into list and detail.
        Returns the record, or None with the reason in `update_error`.
        """
        if self.is_updating:
            raise ValidationError("An update is already in progress")

        self.is_updating = True
        self.update_error = None
        try:
            updated = self.api.update_inquiry(inquiry_id, changes)
        except InquiryError as e:
            logger.warning(f"Failed to update inquiry {inquiry_id}: {e.message}")
            self.update_error = e.message
            return None
        finally:
            self.is_updating = False

        self.inquiries = replace_by_id(self.inquiries, updated)
        if self.selected is not None and self.selected.get("id") == updated.get("id"):
            self.selected = updated
        return updated

    def change_status(self, inquiry_id: str, status: str):
        return self.update(inquiry_id, {"status": InquiryStatus(status).value})

    def change_priority(self, inquiry_id: str, priority: str):
        return self.update(inquiry_id, {"priority": InquiryPriority(priority).value})

    def assign(self, inquiry_id: str, assignee: Optional[str]):
        return self.update(inquiry_id, {"assigned_to": assignee or None})

    def edit_notes(self, text: str):
        """Local edit only; nothing is sent until save_notes."""
        self.notes_text = text

    def save_notes(self):
        if self.selected is None:
            raise ValidationError("Select an inquiry first")
        return self.update(self.selected["id"], {"admin_notes": self.notes_text})

    # -------------------------------------------------
    # Export
    # -------------------------------------------------
    def export_csv(self, out: TextIO) -> int:
        """Write the visible rows as CSV; returns the number of rows."""
        rows = self.visible
        writer = csv.DictWriter(out, fieldnames=EXPORT_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow({col: row.get(col) for col in EXPORT_COLUMNS})
        return len(rows)
