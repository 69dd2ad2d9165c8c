from typing import Any

import attrs


@attrs.frozen
class CarryOnAllowance:
    allowed: bool = True
    weight_kg: float = 10
    dimensions: str = '55x40x20 cm'


@attrs.frozen
class CheckedAllowance:
    allowed: bool = True
    weight_kg: float = 23
    pieces: int = 1
    extra_piece_price: int = 500


@attrs.frozen
class BaggagePolicy:
    """Baggage allowance of a flight; bookings keep a copy taken at creation."""

    carry_on: CarryOnAllowance = attrs.field(factory=CarryOnAllowance)
    checked: CheckedAllowance = attrs.field(factory=CheckedAllowance)

    def to_dict(self) -> dict[str, Any]:
        return attrs.asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> 'BaggagePolicy':
        if not data:
            return cls()
        return cls(
            carry_on=CarryOnAllowance(**data.get('carry_on', {})),
            checked=CheckedAllowance(**data.get('checked', {})),
        )
