from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4, UUID

from dateutil.parser import isoparse


def default_datetime():
    return datetime.now(timezone.utc)


def get_uuid_hex(_int=None):
    return uuid4().hex if _int is None else UUID(int=_int, version=4).hex


class ModelValidationError(Exception):
    """
    Exception raised when one or more validation errors occur in the model.

    Attributes:
        errors (list): A list of error messages returned from validation methods.
    """

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        elif not isinstance(errors, list):
            raise ValueError("Errors should be a string or a list of strings")
        self.errors = errors
        super().__init__(self.format_errors())

    def format_errors(self):
        return "\n".join(self.errors)

    def __str__(self):
        return self.format_errors()


@dataclass(kw_only=True)
class BaseModel:
    """
    A base dataclass for kangan records. Rows are written once and never
    versioned, so only an entity_id and a creation timestamp are carried.
    """

    entity_id: str = field(default_factory=get_uuid_hex,
                           metadata={'field_type': 'entity_id'})
    created_on: datetime = field(default_factory=default_datetime)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entity_id={self.entity_id})"

    @classmethod
    def fields(cls) -> List[str]:
        """Get a list of field names for this model."""
        return [f.name for f in fields(cls)]

    def as_dict(self, convert_datetime_to_iso_string: bool = False,
                convert_uuids: bool = True) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, UUID) and convert_uuids:
                value = str(value)
            elif isinstance(value, datetime) and convert_datetime_to_iso_string:
                value = value.isoformat()
            result[f.name] = value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BaseModel":
        """
        Build an instance from a database row. Unknown columns are ignored,
        ISO strings in datetime fields are parsed.
        """
        known = {f.name: f for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                continue
            if isinstance(value, UUID):
                value = value.hex
            elif known[key].type is datetime and isinstance(value, str):
                value = isoparse(value)
            kwargs[key] = value
        return cls(**kwargs)

    def validate(self):
        """
        Runs every validate_<field> method defined on the model and raises
        ModelValidationError with all collected messages.
        """
        errors = []
        for name in self.fields():
            validator = getattr(self, f"validate_{name}", None)
            if callable(validator):
                message = validator()
                if message:
                    errors.append(message)
        if errors:
            raise ModelValidationError(errors)

    def prepare_for_save(self):
        self.validate()
