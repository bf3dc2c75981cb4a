"""
app/schemas/user.py

Purpose: Request and response models for the users API

- UserPayload: body of POST /users and PUT /users/{id}
- Response envelopes for create / update / delete
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List

from utils.validation_utils import parse_hobbies


class UserPayload(BaseModel):
    """
    All user fields except the id.

    Used for creation and for full replacement on update. Unknown
    keys are ignored; hobbies may arrive as a list or as a
    comma-separated string.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0)
    city: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    hobbies: List[str] = Field(default_factory=list)

    @field_validator("hobbies", mode="before")
    @classmethod
    def split_hobbies(cls, v):
        if v is None or isinstance(v, str):
            return parse_hobbies(v)
        if isinstance(v, (list, tuple)) and all(isinstance(item, str) for item in v):
            return parse_hobbies(v)
        # Let the List[str] validation report anything else
        return v

    def to_document(self) -> Dict[str, Any]:
        """Fields as stored in MongoDB (no _id)."""
        return self.model_dump()


class UserCreatedResponse(BaseModel):
    message: str
    savedUser: Dict[str, Any]


class UserUpdatedResponse(BaseModel):
    message: str
    updatedUser: Dict[str, Any]


class UserDeletedResponse(BaseModel):
    message: str
    deletedUser: Dict[str, Any]
