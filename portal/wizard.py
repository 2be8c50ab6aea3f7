# portal/wizard.py

"""
Four-step inquiry form.

    1 personal info -> 2 location -> 3 service requirements
      -> 4 documents & preferences -> submit

Moving forward is gated per step; moving back never is. Every field
change is saved to the draft (debounced) so a reload restores the form,
and the draft is only cleared once the API accepted the inquiry.
"""

from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from core.config import settings
from core.errors import InquiryError, ValidationError
from core.logging_config import logger
from core.utils import is_blank
from models.enums import ContactPreference, ServiceCategory
from portal.api_client import InquiryApiClient
from portal.draft import Debouncer, Draft
from portal.selection import LocationSelection

TOTAL_STEPS = 4

# Fields that must be non-empty before leaving each step.
STEP_REQUIRED_FIELDS = {
    1: ("full_name", "email", "phone"),
    2: ("address", "pincode"),
    3: ("category", "requirements"),
    4: (),
}


class InquiryFormData(BaseModel):
    # Personal information
    full_name: str = ""
    email: str = ""
    phone: str = ""
    alternate_phone: str = ""

    # Location
    address: str = ""
    pincode: str = ""

    # Service details
    category: str = ""
    subcategory: str = ""
    requirements: str = ""
    budget: str = ""
    timeline: str = ""

    # Additional information
    family_size: str = ""
    special_requirements: str = ""

    # Preferences
    contact_preference: List[str] = Field(default_factory=list)
    visit_preference: str = ""


class InquiryWizard:
    def __init__(
        self,
        api: InquiryApiClient,
        draft: Draft,
        location: Optional[LocationSelection] = None,
        selected_category: Optional[Union[str, ServiceCategory]] = None,
        autosave_delay: float = None,
        on_submit: Optional[Callable[[Dict[str, Any]], None]] = None,
    ):
        self.api = api
        self.draft = draft
        self.location = location or LocationSelection()
        self.on_submit = on_submit

        self.form = InquiryFormData()
        self.current_step = 1
        self.documents: List[str] = []
        self.is_submitting = False
        self.saved_progress = False
        self.error: Optional[str] = None
        self.submitted_inquiry: Optional[Dict[str, Any]] = None

        delay = settings.DRAFT_AUTOSAVE_SECONDS if autosave_delay is None else autosave_delay
        self._autosave = Debouncer(self._save_draft, delay)

        self._restore_draft()
        if selected_category:
            self.set_selected_category(selected_category)

    # -------------------------------------------------
    # Draft
    # -------------------------------------------------
    def _restore_draft(self):
        data = self.draft.load()
        if not data:
            return
        try:
            self.form = InquiryFormData.model_validate(data)
        except PydanticValidationError as e:
            logger.warning(f"Discarding saved draft: {e.error_count()} invalid field(s)")
            return
        self.saved_progress = True

    def _save_draft(self, data: Dict[str, Any]):
        self.draft.save(data)
        self.saved_progress = True

    # -------------------------------------------------
    # Inputs
    # -------------------------------------------------
    def update_field(self, field: str, value: Any):
        if field not in InquiryFormData.model_fields:
            raise KeyError(f"Unknown form field: {field}")
        data = self.form.model_dump()
        data[field] = value
        self.form = InquiryFormData.model_validate(data)
        self._autosave.call(self.form.model_dump(mode="json"))

    def set_location(self, location: LocationSelection):
        self.location = location

    def set_selected_category(self, category: Union[str, ServiceCategory], subcategory: Optional[str] = None):
        """Prefill from the category picker outside the form."""
        category = ServiceCategory(category).value
        if self.form.category != category:
            self.update_field("category", category)
        if subcategory and not self.form.subcategory:
            self.update_field("subcategory", subcategory)

    def toggle_contact_preference(self, preference: Union[str, ContactPreference], checked: bool):
        preference = ContactPreference(preference).value
        current = list(self.form.contact_preference)
        if checked and preference not in current:
            current.append(preference)
        elif not checked and preference in current:
            current.remove(preference)
        self.update_field("contact_preference", current)

    def attach_documents(self, paths: List[str]):
        # Kept for display only; uploads are not implemented.
        self.documents.extend(paths)

    def remove_document(self, index: int):
        del self.documents[index]

    # -------------------------------------------------
    # Steps
    # -------------------------------------------------
    @property
    def progress(self) -> float:
        return self.current_step / TOTAL_STEPS * 100

    def missing_fields(self, step: int = None) -> List[str]:
        step = step or self.current_step
        if step not in STEP_REQUIRED_FIELDS:
            raise ValueError(f"No such step: {step}")
        missing = [f for f in STEP_REQUIRED_FIELDS[step] if is_blank(getattr(self.form, f))]
        if step == 2:
            if not self.location.state:
                missing.append("state")
            if not self.location.city:
                missing.append("city")
        return missing

    def is_step_valid(self, step: int = None) -> bool:
        return not self.missing_fields(step)

    @property
    def can_go_next(self) -> bool:
        return self.current_step < TOTAL_STEPS and self.is_step_valid()

    def next(self):
        if self.current_step >= TOTAL_STEPS:
            raise ValidationError("Already on the last step")
        missing = self.missing_fields()
        if missing:
            raise ValidationError(
                f"Step {self.current_step} is incomplete: {', '.join(missing)}",
                field=missing[0],
            )
        self.current_step += 1

    def previous(self):
        if self.current_step > 1:
            self.current_step -= 1

    # -------------------------------------------------
    # Submission
    # -------------------------------------------------
    def build_payload(self) -> Dict[str, Any]:
        form = self.form
        return {
            "name": form.full_name,
            "email": form.email,
            "phone": form.phone,
            "state": self.location.state,
            "city": self.location.city,
            "area": self.location.area_text(),
            "category": form.category,
            "subcategory": form.subcategory or None,
            "budget_range": form.budget or None,
            "timeline": form.timeline or None,
            "description": form.requirements,
            "special_requirements": form.special_requirements or None,
            "documents": [],
        }

    @property
    def can_submit(self) -> bool:
        return self.current_step == TOTAL_STEPS and not self.is_submitting and self.is_step_valid()

    def submit(self) -> Optional[Dict[str, Any]]:
        """
        Send the inquiry. Returns the stored inquiry, or None on failure
        with the reason in `self.error`; the step and draft are kept then.
        """
        if self.current_step != TOTAL_STEPS:
            raise ValidationError("The inquiry can only be submitted from the last step")
        if self.is_submitting:
            raise ValidationError("Submission already in progress")

        self.is_submitting = True
        self.error = None
        try:
            inquiry = self.api.create_inquiry(self.build_payload())
        except InquiryError as e:
            logger.warning(f"Inquiry submission failed: {e.message}")
            self.error = e.message
            self._autosave.flush()
            return None
        finally:
            self.is_submitting = False

        self._autosave.cancel()
        self.draft.clear()
        self.form = InquiryFormData()
        self.documents = []
        self.current_step = 1
        self.saved_progress = False
        self.submitted_inquiry = inquiry
        logger.info(f"Inquiry {inquiry.get('id')} submitted")

        if self.on_submit:
            self.on_submit(inquiry)
        return inquiry
