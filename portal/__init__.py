# portal/__init__.py

from .api_client import InquiryApiClient
from .dashboard import AdminDashboard, filter_by_text
from .draft import Draft, JsonFileStorage, MemoryStorage
from .selection import LocationSelection, SelectionState
from .wizard import InquiryWizard

__all__ = [
    "InquiryApiClient",
    "AdminDashboard",
    "filter_by_text",
    "Draft",
    "JsonFileStorage",
    "MemoryStorage",
    "LocationSelection",
    "SelectionState",
    "InquiryWizard",
]
