"""
Pydantic integration for uuid_utils.UUID (booking identifiers are UUID7).

https://docs.pydantic.dev/latest/concepts/types/#customizing-validation-with-__get_pydantic_core_schema__

```python
class BookingResponse(BaseModel):
    id: UtilsUUID7  # JSON string in, uuid_utils.UUID inside, string out
```
"""

from typing import Any
import uuid

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from uuid_utils import UUID


def to_utils_uuid(value: Any) -> UUID:
    try:
        return UUID(str(value))
    except Exception as e:
        raise ValueError(f'Invalid UUID: {value}') from e


def to_std_uuid(value: Any) -> uuid.UUID:
    """SQLAlchemy's Uuid column type only accepts the standard library class"""
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


class UtilsUUID7(UUID):
    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        def validate_python(value: Any) -> UUID:
            if isinstance(value, UUID):
                return value
            return to_utils_uuid(value)

        # json_or_python_schema keeps the schema convertible for OpenAPI,
        # a plain validator function schema is not
        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.str_schema(),
                    core_schema.no_info_plain_validator_function(to_utils_uuid),
                ]
            ),
            python_schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(UUID),
                    core_schema.chain_schema(
                        [
                            core_schema.union_schema(
                                [
                                    core_schema.str_schema(),
                                    core_schema.is_instance_schema(uuid.UUID),
                                ]
                            ),
                            core_schema.no_info_plain_validator_function(validate_python),
                        ]
                    ),
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str,
                when_used='always',
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {'type': 'string', 'format': 'uuid'}
