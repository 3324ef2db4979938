from pydantic_core.core_schema import CoreSchema, any_schema
from pydantic.json_schema import JsonSchemaValue
from pydantic import BaseModel, ConfigDict
from typing import Any


class RawBaseModel(BaseModel):
    # ? everything is built once per request (or once at startup) and never touched again
    model_config = ConfigDict(frozen=True)

    def as_payload(self) -> dict[str, Any]:
        return self.model_dump(mode='json', exclude_none=True)


class PydanticArbitraryType:
    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        _source_type: None,
        _handler: None
    ) -> CoreSchema:
        return any_schema()

    @classmethod
    def __get_pydantic_json_schema__(
        cls,
        _core_schema: CoreSchema,
        _handler: None
    ) -> JsonSchemaValue:
        return {'type': 'any'}
