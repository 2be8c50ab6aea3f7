# models/inquiry.py

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.enums import InquiryPriority, InquiryStatus, ServiceCategory


# Fields the public form must supply, in the order they are reported.
REQUIRED_CREATE_FIELDS = ("name", "email", "phone", "state", "city", "category", "description")

# Fields an admin may change after creation. Kept separate from the
# schema so a new column is never editable by accident.
ALLOWED_UPDATE_FIELDS = frozenset({"status", "priority", "assigned_to", "admin_notes"})

# Allow-listed fields that may be cleared by sending null.
NULLABLE_UPDATE_FIELDS = frozenset({"assigned_to", "admin_notes"})


# -------------------------------------------------
# Shared fields
# -------------------------------------------------
class InquiryBase(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    area: Optional[str] = Field(None, description='Selected areas joined by ", "')
    category: Optional[ServiceCategory] = None
    subcategory: Optional[str] = None
    budget_range: Optional[str] = None
    timeline: Optional[str] = None
    description: Optional[str] = Field(None, description="Detailed requirements")
    special_requirements: Optional[str] = None


# -------------------------------------------------
# Create
# -------------------------------------------------
class InquiryCreate(InquiryBase):
    """
    Body of POST /inquiries.

    Every field is optional at the schema level: the required ones are
    checked by the service so the error names the missing field.
    Blank strings are treated as absent.
    """

    documents: Optional[List[Any]] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_strings_to_none(cls, v):
        if isinstance(v, str) and v.strip() == "":
            return None
        return v


# -------------------------------------------------
# Update (PATCH)
# -------------------------------------------------
class InquiryUpdate(BaseModel):
    """Admin merge-patch. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    status: Optional[InquiryStatus] = None
    priority: Optional[InquiryPriority] = None
    assigned_to: Optional[str] = None
    admin_notes: Optional[str] = None


# -------------------------------------------------
# Read (Supabase → API response)
# -------------------------------------------------
class InquiryRead(InquiryBase):
    id: str
    name: str
    email: str
    phone: str
    state: str
    city: str
    category: ServiceCategory
    description: str
    status: InquiryStatus
    priority: InquiryPriority
    assigned_to: Optional[str] = None
    admin_notes: Optional[str] = None
    documents: List[Any] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v):
        if isinstance(v, UUID):
            return str(v)
        return v

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def normalize_timestamp(cls, v):
        # Parse trailing Z timestamps
        if isinstance(v, str) and v.endswith("Z"):
            return v.replace("Z", "+00:00")
        return v

    @field_validator("documents", mode="before")
    @classmethod
    def normalize_documents(cls, v):
        return v or []


# -------------------------------------------------
# Response envelopes
# -------------------------------------------------
class InquiryResponse(BaseModel):
    inquiry: InquiryRead


class InquiryMutationResponse(BaseModel):
    success: bool = True
    inquiry: InquiryRead
    message: str


class InquiryListResponse(BaseModel):
    inquiries: List[InquiryRead]
    total: int
    limit: int
    offset: int
