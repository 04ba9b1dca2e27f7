"""Registration input validation.

Pure validation with no I/O: checks shape and constraints of an untrusted
registration payload and returns a typed RegistrationInput. All field
failures are collected and reported together.
"""

from typing import Any, Mapping

import pydantic
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from domain.model.errors import ValidationError
from domain.model.registration import FieldError, RegistrationInput


class RegistrationSchema(BaseModel):
    """Constraints for self-registration.

    Field order is the order failures are reported in. Unknown keys, such as
    a client-supplied role, are ignored.
    """
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=2, alias='firstName')
    last_name: str = Field(..., min_length=2, alias='lastName')
    phone: str = Field(..., min_length=9)
    address: str = Field(..., min_length=5)
    city: str = Field(..., min_length=2)
    postal: str = Field(..., min_length=5)
    country: str = Field(..., min_length=2)


def _field_errors(exc: pydantic.ValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors(include_url=False):
        loc = error.get('loc') or ('body',)
        errors.append(FieldError(field=str(loc[0]), message=error['msg']))
    return errors


def validate_registration(data: Mapping[str, Any]) -> RegistrationInput:
    """Validate a raw registration payload.

    Returns:
        RegistrationInput ready for the account service

    Raises:
        ValidationError: one or more fields are invalid; ``errors`` lists them all
    """
    if not isinstance(data, Mapping):
        raise ValidationError(errors=[FieldError(field='body', message='Expected a JSON object')])

    try:
        schema = RegistrationSchema.model_validate(dict(data))
    except pydantic.ValidationError as e:
        raise ValidationError(errors=_field_errors(e)) from None

    return RegistrationInput(
        email=schema.email,
        password=schema.password,
        first_name=schema.first_name,
        last_name=schema.last_name,
        phone=schema.phone,
        address=schema.address,
        city=schema.city,
        postal=schema.postal,
        country=schema.country,
    )
