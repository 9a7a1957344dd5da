"""
Shared pydantic base for request bodies.

Clients speak camelCase JSON (``roleId``, ``phoneNumber``); services work with
snake_case attributes. Both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def changes(self) -> dict:
        """Fields the client actually sent, snake_case keys."""
        return self.model_dump(exclude_unset=True)
