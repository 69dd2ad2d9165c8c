from enum import StrEnum
from typing import Any, Optional

import attrs


class DocumentType(StrEnum):
    NATIONAL_ID = 'national_id'
    PASSPORT = 'passport'


@attrs.frozen
class Passenger:
    first_name: str
    last_name: str
    email: str
    document_type: DocumentType = attrs.field(converter=DocumentType)
    document_number: str
    phone: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'

    def to_dict(self) -> dict[str, Any]:
        return attrs.asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Passenger':
        return cls(**data)
