"""
Block definition models for fields.

These Pydantic models describe the JSON form a field takes inside a
block definition. Blocks carry many more keys than a single field
needs, so unknown keys are ignored.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# --- Enums ---


class FieldType(str, Enum):
    """Supported field types, keyed by their block definition name."""

    DATE = "field_date"


# --- Field Definitions ---


class FieldDateDefinition(BaseModel):
    """JSON definition of a date field.

    Both keys are optional at this level; FieldDate.from_json decides
    which omissions are load errors.
    """

    model_config = ConfigDict(extra="ignore")

    type: Literal["field_date"] = Field(
        default=FieldType.DATE.value,
        description="Field type discriminator",
    )
    name: str | None = Field(
        default=None,
        description="Field name, unique within its block",
    )
    date: str | None = Field(
        default=None,
        description="Initial value as YYYY-MM-DD (current date if absent)",
    )
