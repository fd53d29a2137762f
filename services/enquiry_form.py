"""
Property Enquiry Form - submission state machine
Holds the form snapshot, validates on submit and hands the record to the store
"""

from typing import List, Optional, Protocol
from enum import Enum
from pydantic import BaseModel, ConfigDict
from models.property_enquiry import EnquiryFormData
from services.enquiry_validator import is_valid_email, is_valid_phone
from services.supabase_enquiry_service import InsertResult
from utils.logger import logger, log_business_event, log_validation_error

INVALID_EMAIL_MESSAGE = "Please enter a valid email address."
INVALID_PHONE_MESSAGE = "Please enter a valid mobile number (at least 10 digits)."
INVALID_CHOICE_MESSAGE = "Please choose one of the listed options for:"
SUCCESS_MESSAGE = "Enquiry submitted successfully!"
FAILURE_MESSAGE = "Failed to submit enquiry. Please try again."
UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again."

class EnquiryStore(Protocol):
    """Anything that can persist an enquiry"""

    async def insert(self, record: EnquiryFormData) -> InsertResult:
        ...

class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"

class Notification(BaseModel):
    """Non-blocking message shown to the user"""
    level: NotificationLevel
    message: str

class FormState(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: EnquiryFormData = EnquiryFormData()
    is_submitting: bool = False
    submitted: bool = False

class SubmissionOutcome(BaseModel):
    """What a submit attempt ended with"""
    submitted: bool
    blocked: bool = False
    notification: Optional[Notification] = None

class PropertyEnquiryForm:
    """
    One user's enquiry form.

    Field changes replace the snapshot wholesale; on_submit validates the
    answers before anything reaches the store, and a failed write
    keeps the snapshot so the user can retry without retyping.
    """

    def __init__(self, store: EnquiryStore):
        self.store = store
        self.state = FormState()
        self.notifications: List[Notification] = []

    @property
    def data(self) -> EnquiryFormData:
        return self.state.data

    @property
    def submit_disabled(self) -> bool:
        return self.state.is_submitting

    def _set_state(self, **changes):
        self.state = self.state.model_copy(update=changes)

    def _notify(self, level: NotificationLevel, message: str) -> Notification:
        notification = Notification(level=level, message=message)
        self.notifications.append(notification)
        return notification

    def _abort(self, message: str, blocked: bool = False) -> SubmissionOutcome:
        self._set_state(is_submitting=False)
        return SubmissionOutcome(
            submitted=False,
            blocked=blocked,
            notification=self._notify(NotificationLevel.ERROR, message)
        )

    def on_field_change(self, field_name: str, value: str):
        """Update a single field; no validation happens here"""
        self._set_state(data=self.state.data.with_field(field_name, value))

    async def on_submit(self) -> SubmissionOutcome:
        if self.state.is_submitting:
            return SubmissionOutcome(submitted=False, blocked=True)

        missing = self.state.data.missing_fields()
        if missing:
            for field_name in missing:
                log_validation_error(field_name, "", "required")
            notification = self._notify(
                NotificationLevel.ERROR,
                f"Please fill in all required fields: {', '.join(missing)}."
            )
            return SubmissionOutcome(submitted=False, blocked=True, notification=notification)

        invalid = self.state.data.invalid_choices()
        if invalid:
            for field_name in invalid:
                log_validation_error(field_name, getattr(self.state.data, field_name), "not an offered option")
            notification = self._notify(
                NotificationLevel.ERROR,
                f"{INVALID_CHOICE_MESSAGE} {', '.join(invalid)}."
            )
            return SubmissionOutcome(submitted=False, blocked=True, notification=notification)

        self._set_state(is_submitting=True)
        snapshot = self.state.data

        if not is_valid_email(snapshot.email):
            log_validation_error("email", snapshot.email, INVALID_EMAIL_MESSAGE)
            return self._abort(INVALID_EMAIL_MESSAGE, blocked=True)

        if not is_valid_phone(snapshot.mobile):
            log_validation_error("mobile", snapshot.mobile, INVALID_PHONE_MESSAGE)
            return self._abort(INVALID_PHONE_MESSAGE, blocked=True)

        try:
            result = await self.store.insert(snapshot)
        except Exception as e:
            logger.error(f"Unexpected error submitting enquiry: {e}", error=e)
            return self._abort(UNEXPECTED_MESSAGE)

        if not result.success:
            logger.error("Error submitting enquiry", error_message=result.error.message, code=result.error.code)
            return self._abort(FAILURE_MESSAGE)

        self._set_state(is_submitting=False, submitted=True)
        log_business_event(
            event="enquiry_submitted",
            entity_type="property_enquiry",
            entity_id=(result.data or {}).get("id"),
            details={"timeline": snapshot.timeline, "budget": snapshot.budget}
        )
        return SubmissionOutcome(
            submitted=True,
            notification=self._notify(NotificationLevel.SUCCESS, SUCCESS_MESSAGE)
        )

    def on_reset(self):
        """Start a new enquiry after a successful one"""
        self.state = FormState()
