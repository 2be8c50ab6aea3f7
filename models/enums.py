from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]

    @classmethod
    def has_value(cls, value) -> bool:
        return value in cls._value2member_map_


# -----------------------------------------------------
# INQUIRY STATUS
# -----------------------------------------------------
class InquiryStatus(BaseStrEnum):
    """Triage workflow state of an inquiry."""

    new = "new"
    contacted = "contacted"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


# -----------------------------------------------------
# INQUIRY PRIORITY
# -----------------------------------------------------
class InquiryPriority(BaseStrEnum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


# -----------------------------------------------------
# SERVICE CATEGORY
# -----------------------------------------------------
class ServiceCategory(BaseStrEnum):
    """Top-level service line the inquiry is about."""

    religious = "Religious"
    residential = "Residential"
    commercial = "Commercial"
    education = "Education"
    medical = "Medical"
    social = "Social"


# -----------------------------------------------------
# FORM TAGS (not enforced server-side)
# -----------------------------------------------------
class BudgetRange(BaseStrEnum):
    under_5_lakh = "under-5-lakh"
    lakh_5_10 = "5-10-lakh"
    lakh_10_25 = "10-25-lakh"
    lakh_25_50 = "25-50-lakh"
    lakh_50_plus = "50-lakh-plus"
    discuss = "discuss"


class Timeline(BaseStrEnum):
    immediate = "immediate"
    three_months = "3-months"
    six_months = "6-months"
    one_year = "1-year"
    flexible = "flexible"


class FamilySize(BaseStrEnum):
    one_two = "1-2"
    three_four = "3-4"
    five_six = "5-6"
    seven_plus = "7-plus"


class ContactPreference(BaseStrEnum):
    phone = "phone"
    email = "email"
    whatsapp = "whatsapp"
    visit = "visit"


class VisitPreference(BaseStrEnum):
    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"
    weekend = "weekend"
    flexible = "flexible"


# Sentinel accepted by the list filters meaning "no filter".
FILTER_ALL = "all"
