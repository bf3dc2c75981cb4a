"""
app/client/form.py

Purpose: User form state

- String-valued fields as typed by the user
- Form state machine (IDLE, EDITING, SUBMITTING)
- State transition validation
- Conversion of the fields into an API payload
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from app.core.logging import get_logger
from utils.constants import USER_FIELDS
from utils.validation_utils import format_hobbies, parse_age, parse_hobbies

logger = get_logger(__name__)


class FormState(str, Enum):
    """
    Lifecycle of a user form.
    """

    IDLE = "IDLE"              # empty form, creating
    EDITING = "EDITING"        # populated from an existing record
    SUBMITTING = "SUBMITTING"  # request in flight


STATE_TRANSITIONS: Dict[FormState, List[FormState]] = {
    FormState.IDLE: [
        FormState.EDITING,
        FormState.SUBMITTING,
    ],
    FormState.EDITING: [
        FormState.IDLE,        # cancel
        FormState.EDITING,     # edit another record
        FormState.SUBMITTING,
    ],
    FormState.SUBMITTING: [
        FormState.IDLE,        # success, or failed create
        FormState.EDITING,     # failed update
    ],
}


class InvalidTransitionError(ValueError):
    """Raised when the form is asked to move to a state it cannot reach."""


def is_valid_transition(from_state: FormState, to_state: FormState) -> bool:
    """
    Checks if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Target state

    Returns:
        True if transition is allowed, False otherwise
    """
    return to_state in STATE_TRANSITIONS.get(from_state, [])


def empty_fields() -> Dict[str, str]:
    return {field: "" for field in USER_FIELDS}


class UserForm:
    """
    Create/edit form for a single user.

    In IDLE the form creates a new user; after start_edit() it
    updates the record it was populated from.
    """

    def __init__(self):
        self.fields: Dict[str, str] = empty_fields()
        self.editing_id: Optional[str] = None
        self.state: FormState = FormState.IDLE
        # State to return to when a submission fails
        self._state_before_submit: FormState = FormState.IDLE

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def _transition(self, to_state: FormState):
        if not is_valid_transition(self.state, to_state):
            raise InvalidTransitionError(f"Invalid form transition: {self.state.value} -> {to_state.value}")
        logger.debug(f"Form {self.state.value} -> {to_state.value}")
        self.state = to_state

    def set_field(self, name: str, value: str):
        """Update one input, as on a change event."""
        if name not in self.fields:
            raise KeyError(f"Unknown form field: {name}")
        if self.state == FormState.SUBMITTING:
            raise InvalidTransitionError("Form is being submitted")
        self.fields[name] = value

    def start_edit(self, user: Dict[str, Any]):
        """
        Populate the form from an existing record.

        Args:
            user: Record as returned by the API (needs "_id" or "id")
        """
        self._transition(FormState.EDITING)
        self.editing_id = user.get("_id") or user.get("id")
        self.fields = {
            "name": user.get("name", ""),
            "age": str(user.get("age", "")),
            "city": user.get("city", ""),
            "email": user.get("email", ""),
            "hobbies": format_hobbies(user.get("hobbies")),
        }

    def cancel(self):
        """Leave edit mode without sending anything."""
        self._transition(FormState.IDLE)
        self.reset_fields()

    def reset_fields(self):
        self.fields = empty_fields()
        self.editing_id = None

    def to_payload(self) -> Dict[str, Any]:
        """
        Converts the fields into an API body.

        Age becomes an integer when it parses as one; otherwise the raw
        text is sent and the API reports the validation error.
        """
        age = parse_age(self.fields["age"])
        return {
            "name": self.fields["name"],
            "age": age if age is not None else self.fields["age"],
            "city": self.fields["city"],
            "email": self.fields["email"],
            "hobbies": parse_hobbies(self.fields["hobbies"]),
        }

    def begin_submit(self) -> Dict[str, Any]:
        """Move to SUBMITTING and return the payload to send."""
        self._state_before_submit = self.state
        self._transition(FormState.SUBMITTING)
        return self.to_payload()

    def finish_submit(self, success: bool):
        """
        Leave SUBMITTING.

        On success the form is cleared and returns to IDLE. On failure the
        fields are kept and the form returns to where it was.
        """
        if success:
            self._transition(FormState.IDLE)
            self.reset_fields()
        else:
            self._transition(self._state_before_submit)
