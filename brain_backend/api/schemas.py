import re
from typing import List, Literal

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator


# Pydantic models for serialization and validation

PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "an uppercase letter"),
    (re.compile(r"[a-z]"), "a lowercase letter"),
    (re.compile(r"\d"), "a number"),
    (re.compile(r"[^A-Za-z0-9]"), "a special character"),
)

SIGNUP_INVALID_MESSAGE = (
    "Password should be 8 to 20 letters, should have atleast one uppercase, "
    "one lowercase, one special character, one number"
)
SIGNIN_INVALID_MESSAGE = "Enter Correct Username & password"
CONTENT_INVALID_MESSAGE = "Invalid content."

_URL_ADAPTER = TypeAdapter(AnyUrl)


class Credentials(BaseModel):
    username: str = Field(..., min_length=3, max_length=10, description="User's username")
    password: str = Field(..., min_length=8, max_length=20)

    @field_validator("password")
    @classmethod
    def check_complexity(cls, value):
        for pattern, label in PASSWORD_RULES:
            if not pattern.search(value):
                raise ValueError(f"Password must contain {label}")
        return value


class MessageOut(BaseModel):
    message: str


class TokenOut(MessageOut):
    token: str


class ContentCreate(BaseModel):
    types: Literal["document", "Twitter", "youtube", "link"]
    link: str
    title: str = Field(..., min_length=1)
    tags: str = Field(..., min_length=1)

    @field_validator("link")
    @classmethod
    def check_link(cls, value):
        # Validated as a URL but stored exactly as sent
        try:
            _URL_ADAPTER.validate_python(value)
        except ValidationError:
            raise ValueError("Invalid URL")
        return value


class ContentOut(BaseModel):
    id: str = Field(..., serialization_alias="_id")
    types: str
    link: str
    title: str
    tags: str
    user_id: str = Field(..., serialization_alias="UserId")

    model_config = ConfigDict(from_attributes=True)


class ContentListOut(BaseModel):
    # "user" is the key the existing frontend reads
    user: List[ContentOut]


class ShareLinkOut(MessageOut):
    shareableLink: str


class SharedContentOut(BaseModel):
    contents: List[ContentOut]
    ownerName: str
