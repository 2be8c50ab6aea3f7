# -------------------------
# Enums
# -------------------------
from .enums import (
    InquiryStatus,
    InquiryPriority,
    ServiceCategory,
    BudgetRange,
    Timeline,
    FamilySize,
    ContactPreference,
    VisitPreference,
    FILTER_ALL,
)

# -------------------------
# Inquiry Models
# -------------------------
from .inquiry import (
    ALLOWED_UPDATE_FIELDS,
    REQUIRED_CREATE_FIELDS,
    InquiryBase,
    InquiryCreate,
    InquiryUpdate,
    InquiryRead,
    InquiryResponse,
    InquiryMutationResponse,
    InquiryListResponse,
)

__all__ = [
    # enums
    "InquiryStatus",
    "InquiryPriority",
    "ServiceCategory",
    "BudgetRange",
    "Timeline",
    "FamilySize",
    "ContactPreference",
    "VisitPreference",
    "FILTER_ALL",

    # inquiries
    "ALLOWED_UPDATE_FIELDS",
    "REQUIRED_CREATE_FIELDS",
    "InquiryBase",
    "InquiryCreate",
    "InquiryUpdate",
    "InquiryRead",
    "InquiryResponse",
    "InquiryMutationResponse",
    "InquiryListResponse",
]
