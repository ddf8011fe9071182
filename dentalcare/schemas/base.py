"""Shared pydantic configuration for persisted records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model serialised with camelCase keys, populated by either spelling."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_storage(self) -> dict:
        """Return the JSON-compatible document persisted for this record."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
