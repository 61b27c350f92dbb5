"""
Shared model helpers for MongoDB documents.
"""
from typing import Any, Optional
from pydantic import BaseModel, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from bson import ObjectId
from bson.errors import InvalidId


class PyObjectId(ObjectId):
    """Custom ObjectId for Pydantic v2. Serialized as a string in JSON mode."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: Any
    ) -> core_schema.CoreSchema:
        def validate(value: Any) -> ObjectId:
            if isinstance(value, ObjectId):
                return value
            if isinstance(value, str):
                if ObjectId.is_valid(value):
                    return ObjectId(value)
                raise ValueError("Invalid ObjectId string")
            raise ValueError("Invalid ObjectId")

        return core_schema.no_info_plain_validator_function(
            validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="json"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string"}


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """Return ``value`` as an ObjectId, or None when it is not a valid one."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class MongoModel(BaseModel):
    """Base for documents stored with an ``_id`` key."""

    model_config = {
        "populate_by_name": True,
        "arbitrary_types_allowed": True,
    }

    def to_document(self) -> dict:
        """Dump to a dict ready for insertion (ObjectIds kept as ObjectIds)."""
        return self.model_dump(by_alias=True)

    def to_json(self, **kwargs) -> dict:
        """Dump to a JSON-compatible dict with string identifiers."""
        return self.model_dump(by_alias=True, mode="json", **kwargs)
