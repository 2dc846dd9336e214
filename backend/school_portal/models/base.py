"""Shared Pydantic base model"""

from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes with camelCase keys and accepts either spelling on input."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def object_id_to_str(value: Any) -> Any:
    """Render Mongo ObjectIds as plain strings."""
    if isinstance(value, ObjectId):
        return str(value)
    return value
