"""
Snippetbox — HTML Form Schemas
===============================

What:  Pydantic models validating the snippet, signup and login forms.
How:   Each field validator raises PydanticCustomError with the exact
       message shown next to the field. validate_form() runs a model
       against the submitted form data and returns either the model or a
       {field: message} map for re-rendering the page.

Rules:
    title     not blank, at most 100 characters
    content   not blank
    expires   one of 1, 7, 365 (days)
    name      not blank
    email     not blank, well-formed address
    password  not blank (signup: at least 8 characters)
"""

import re
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

EMAIL_RX = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

PERMITTED_EXPIRES = ("1", "7", "365")


class Form(BaseModel):
    # A field missing from the submission is validated like an empty one
    model_config = ConfigDict(validate_default=True)


FormT = TypeVar("FormT", bound=Form)


def _not_blank(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("blank", "This field cannot be blank")
    return value


def _valid_email(value: str) -> str:
    _not_blank(value)
    if not EMAIL_RX.match(value):
        raise PydanticCustomError("email", "This field must be a valid email address")
    return value


class SnippetForm(Form):
    title: str = ""
    content: str = ""
    expires: str = "365"

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        _not_blank(v)
        if len(v) > 100:
            raise PydanticCustomError(
                "max_chars", "This field cannot be more than 100 characters long"
            )
        return v

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator("expires")
    @classmethod
    def validate_expires(cls, v: str) -> str:
        v = v.strip()
        if v not in PERMITTED_EXPIRES:
            raise PydanticCustomError("permitted", "This field must equal 1, 7 or 365")
        return v

    @property
    def expires_days(self) -> int:
        return int(self.expires)


class SignupForm(Form):
    name: str = ""
    email: str = ""
    password: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _valid_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        _not_blank(v)
        if len(v) < 8:
            raise PydanticCustomError(
                "min_chars", "This field must be at least 8 characters long"
            )
        return v


class LoginForm(Form):
    email: str = ""
    password: str = ""

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _valid_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _not_blank(v)


def validate_form(
    form_cls: Type[FormT], data: Mapping[str, Any]
) -> Tuple[Optional[FormT], Dict[str, str]]:
    """
    Validate submitted form data.

    Only the fields the form declares are read; every value is coerced to
    str the way browsers submit it.

    Returns:
        (form, {}) when valid, (None, field_errors) otherwise. Only the first
        error of each field is kept.
    """
    values = {
        name: str(data[name]) for name in form_cls.model_fields if data.get(name) is not None
    }
    try:
        return form_cls(**values), {}
    except ValidationError as e:
        field_errors: Dict[str, str] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "__all__"
            field_errors.setdefault(field, error["msg"])
        return None, field_errors
