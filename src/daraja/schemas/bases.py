"""
Base Schema Models for the Daraja client

Core Classes:
    - DarajaModel: Base model for caller-facing request payloads
    - WireModel: Base model for provider bodies, keyed by the provider's
      PascalCase field names and tolerant of fields added upstream

Dependencies:
    - pydantic: For data validation and serialization
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class DarajaModel(BaseModel):
    """
    Base class for request payloads built by callers.

    Unknown fields are rejected so that typos in keyword arguments fail
    loudly instead of silently dropping a value from the request.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)


class WireModel(BaseModel):
    """
    Base class for JSON bodies exchanged with the provider.

    Fields are declared with snake_case names and aliased to the provider's
    field names. Extra fields are preserved, so ``to_wire()`` returns the body
    exactly as it was received.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_wire(self) -> Dict[str, Any]:
        """
        Serialize using the provider's field names.

        Returns:
            Dict[str, Any]: JSON-ready dictionary with aliased keys.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
