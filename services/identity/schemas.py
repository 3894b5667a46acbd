"""
Pydantic schema types for identifiers in request bodies.

``RutStr`` is the declarative rule that enrollment forms and guardian
record creation validate identifiers with: it strips whitespace, normalizes
the RUT and rejects it with a single fixed message when the check digit does
not match. Validated fields hold the normalized form ("12345678-5").
"""

from typing import Annotated, Any, List, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from .helpers.rut import normalize_rut, validate_rut

INVALID_RUT_MESSAGE = "invalid identifier"

MAX_PHOTOS = 3


def check_rut(value: str) -> str:
    """
    Normalize and validate a RUT field value.

    Malformed identifiers and check digit mismatches are reported
    the same way.

    Raises:
        PydanticCustomError: If the RUT is not valid
    """
    normalized = normalize_rut(value)
    if not validate_rut(normalized):
        raise PydanticCustomError("invalid_rut", INVALID_RUT_MESSAGE)
    return normalized


def _absent_rut_to_none(value: Any) -> Any:
    """Treat values that normalize to nothing as a missing identifier."""
    if value is None:
        return None
    if isinstance(value, str) and not normalize_rut(value):
        return None
    return value


RutStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True),
    AfterValidator(check_rut),
]

OptionalRutStr = Annotated[Optional[RutStr], BeforeValidator(_absent_rut_to_none)]

_rut_adapter = TypeAdapter(RutStr)


def parse_rut(value: Any) -> str:
    """
    Validate a single RUT value with the ``RutStr`` rule.

    Args:
        value: Raw identifier (e.g., from a form field)

    Returns:
        Normalized RUT

    Raises:
        pydantic.ValidationError: If the RUT is not valid

    Examples:
        >>> parse_rut(" 12.345.678-5 ")
        '12345678-5'
    """
    return _rut_adapter.validate_python(value)


def _to_nullable(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    trimmed = value.strip()
    return trimmed or None


class _RequestModel(BaseModel):
    """Base for request bodies: camelCase aliases, snake_case accepted."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class StudentPayload(_RequestModel):
    """Student section of an enrollment request."""

    first_name: str = Field(min_length=1)
    middle_name: Optional[str] = None
    last_name: str = Field(min_length=1)
    second_last_name: Optional[str] = None
    identification_number: RutStr
    grade_id: Optional[str] = None

    @field_validator("middle_name", "second_last_name", "grade_id", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Blank optional fields are stored as missing."""
        return _to_nullable(v)


class GuardianPayload(_RequestModel):
    """
    Guardian section of an enrollment request.

    Either references an existing guardian by ``id`` or carries the
    details needed to create one.
    """

    id: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    second_last_name: Optional[str] = None
    identification_number: OptionalRutStr = None
    phone: Optional[str] = None
    email: Optional[str] = None
    preferred_language: str = "es"
    relation: Optional[str] = None
    address: Optional[str] = None

    @field_validator(
        "id",
        "first_name",
        "middle_name",
        "last_name",
        "second_last_name",
        "phone",
        "email",
        "relation",
        "address",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v):
        """Blank optional fields are stored as missing."""
        return _to_nullable(v)

    @field_validator("preferred_language", mode="before")
    @classmethod
    def default_language(cls, v):
        """Fall back to Spanish when no language is given."""
        return _to_nullable(v) or "es"

    @model_validator(mode="after")
    def require_details_for_new_guardian(self):
        """A guardian without id must carry every required detail."""
        if self.id:
            return self

        required = {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "identification_number": self.identification_number,
            "phone": self.phone,
            "email": self.email,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ValueError(f"guardian fields are required: {', '.join(missing)}")
        return self

    def is_reference(self) -> bool:
        """Check if this payload points at an existing guardian."""
        return self.id is not None


class EnrollStudentRequest(_RequestModel):
    """Body of a student enrollment request."""

    student: StudentPayload
    guardian: GuardianPayload
    photo_keys: List[str] = Field(min_length=1, max_length=MAX_PHOTOS)
