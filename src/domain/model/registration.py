from dataclasses import dataclass, field


@dataclass(frozen=True)
class RegistrationInput:
    """Validated self-registration data.

    Holds the plaintext password only until it is hashed; never persist or log it.
    """
    email: str
    password: str = field(repr=False)
    first_name: str
    last_name: str
    phone: str
    address: str
    city: str
    postal: str
    country: str


@dataclass(frozen=True)
class FieldError:
    """A single validation failure for one input field."""
    field: str
    message: str
