"""Conversion between stored JSON records (camelCase) and domain fields (snake_case)."""

import re

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def fields_from_record(record: dict, allowed: set[str]) -> dict:
    """Map a stored record onto keyword arguments, keeping only ``allowed`` fields."""
    kwargs = {}
    for key, value in record.items():
        field_name = camel_to_snake(key)
        if field_name in allowed:
            kwargs[field_name] = value
    return kwargs


def record_from_fields(source, field_names: tuple[str, ...]) -> dict:
    """Build a camelCase record from attributes of ``source``."""
    return {snake_to_camel(name): getattr(source, name) for name in field_names}
