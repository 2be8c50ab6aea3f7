# routers/inquiries.py

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Query, status as http_status

from core.config import settings
from core.supabase_client import get_supabase_client
from models.inquiry import (
    InquiryListResponse,
    InquiryMutationResponse,
    InquiryResponse,
    InquiryUpdate,
)
from services import inquiry_service

router = APIRouter(
    prefix="/inquiries",
    tags=["Inquiries"],
)


# ============================================================
# CREATE INQUIRY (public form)
# ============================================================
@router.post(
    "",
    response_model=InquiryMutationResponse,
    status_code=http_status.HTTP_201_CREATED,
    summary="Submit an inquiry",
)
def create_inquiry(payload: Dict[str, Any] = Body(..., description="InquiryCreate fields")):
    """
    Submit a service inquiry from the public form.

    Required: `name`, `email`, `phone`, `state`, `city`, `category`,
    `description`. A missing one answers 400 with
    `{"error": "Missing required field: <field>"}`; presence is checked
    before any value is validated.

    The inquiry always starts with status `new` and the default priority.
    """
    client = get_supabase_client()
    inquiry = inquiry_service.create_inquiry(client, payload)
    return {
        "success": True,
        "inquiry": inquiry,
        "message": "Inquiry submitted successfully",
    }


# ============================================================
# LIST INQUIRIES (admin dashboard)
# ============================================================
@router.get(
    "",
    response_model=InquiryListResponse,
    summary="List inquiries",
)
def list_inquiries(
    status: Optional[str] = Query(None, description="Status filter or 'all'"),
    category: Optional[str] = Query(None, description="Category filter or 'all'"),
    priority: Optional[str] = Query(None, description="Priority filter or 'all'"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
):
    """
    Newest inquiries first. Filters are exact matches combined with AND;
    an unknown filter value returns an empty page rather than an error.
    """
    client = get_supabase_client()
    inquiries, total = inquiry_service.list_inquiries(
        client,
        status=status,
        category=category,
        priority=priority,
        limit=limit,
        offset=offset,
    )
    return {
        "inquiries": inquiries,
        "total": total,
        "limit": limit,
        "offset": offset,
    }


# ============================================================
# GET INQUIRY
# ============================================================
@router.get(
    "/{inquiry_id}",
    response_model=InquiryResponse,
    summary="Get one inquiry",
)
def get_inquiry(inquiry_id: str):
    client = get_supabase_client()
    return {"inquiry": inquiry_service.get_inquiry(client, inquiry_id)}


# ============================================================
# UPDATE INQUIRY (admin triage)
# ============================================================
@router.patch(
    "/{inquiry_id}",
    response_model=InquiryMutationResponse,
    summary="Update status, priority, assignee or notes",
)
def update_inquiry(inquiry_id: str, payload: InquiryUpdate):
    """
    Merge-patch limited to `status`, `priority`, `assigned_to` and
    `admin_notes`. Other keys are ignored; a body with none of these
    answers 400 `{"error": "No valid fields to update"}`.
    """
    client = get_supabase_client()
    changes = payload.model_dump(exclude_unset=True, mode="json")
    inquiry = inquiry_service.update_inquiry(client, inquiry_id, changes)
    return {
        "success": True,
        "inquiry": inquiry,
        "message": "Inquiry updated successfully",
    }
