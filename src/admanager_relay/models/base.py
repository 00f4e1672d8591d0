"""Base model with common configuration."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Get current UTC datetime (Python 3.12 compatible)."""
    return datetime.now(timezone.utc)


class RelayModel(PydanticBaseModel):
    """Base model for relay payloads, serialized with camelCase keys."""

    model_config = {
        "alias_generator": to_camel,
        # Allow population by field name
        "populate_by_name": True,
        # Use enum values instead of names
        "use_enum_values": True,
    }

    def to_payload(self, exclude_none: bool = True) -> dict[str, Any]:
        """Serialize to the JSON body returned to callers."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=exclude_none)
