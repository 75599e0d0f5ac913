from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def reject_null(value: Any) -> Any:
    """Before-validator for optional update fields backed by NOT NULL columns.

    Leaving the field out keeps the stored value; an explicit ``null`` is an
    invalid request.
    """
    if value is None:
        raise ValueError("must not be null")
    return value


class BaseSchema(BaseModel):
    """Wire model: snake_case attributes, camelCase JSON keys.

    Incoming strings are trimmed, so names and phones typed with stray spaces
    are stored clean.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )
