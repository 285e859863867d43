"""
Base models for FPGA interface schema objects.

Provides shared base models with centralized configuration so the schema
classes do not repeat ``model_config`` declarations.

Architecture Decision:
    Two policies exist on purpose:
    StrictModel (extra="forbid") is for configuration objects where extra
    fields indicate user typos in a YAML build file.
    ValueModel (frozen=True) is for decoded interface values that are used
    as mapping keys and must hash consistently.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class InterfaceBaseModel(BaseModel):
    """Base model with shared configuration for all schema models.

    Provides camelCase aliasing and allows field population by either alias
    or Python name.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class StrictModel(InterfaceBaseModel):
    """Base model that forbids unknown fields and validates assignment."""

    model_config = {
        **InterfaceBaseModel.model_config,
        "validate_assignment": True,
        "extra": "forbid",
    }


class ValueModel(InterfaceBaseModel):
    """Immutable base model.

    Note: frozen models are hashable, so instances can be used in sets and as
    dictionary keys.
    """

    model_config = {
        **InterfaceBaseModel.model_config,
        "frozen": True,
    }
