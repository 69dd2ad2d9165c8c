import attrs


def _validate_iata_code(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if len(value) != 3 or not value.isalpha() or not value.isupper():
        raise ValueError(f'{attribute.name} must be a 3-letter upper-case IATA code')


@attrs.frozen
class Airport:
    city: str
    code: str = attrs.field(converter=str.upper, validator=_validate_iata_code)
    name: str
