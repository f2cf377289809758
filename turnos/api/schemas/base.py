from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Request body with camelCase keys on the wire and snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def provided_fields(self) -> dict:
        """Only the fields the client actually sent (snake_case keys)."""
        return self.model_dump(exclude_unset=True)
