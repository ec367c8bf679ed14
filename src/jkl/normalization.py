"""Flattening of raw attribute values into attribute records."""

from __future__ import annotations

from dataclasses import dataclass, field

from jkl.schema import AttributeRecord


@dataclass(frozen=True)
class Scalar:
    """A plain value already rendered as text."""

    text: str


@dataclass(frozen=True)
class Composite:
    """A record-like value with named sub-fields."""

    fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Sequence:
    """An ordered array value."""

    items: list[str] = field(default_factory=list)


RawValue = Scalar | Composite | Sequence


def normalize_value(bean: str, attribute: str, raw: RawValue) -> list[AttributeRecord]:
    """Flatten one raw value into an ordered list of records.

    Composite fields come out sorted by name, sequence items keep their
    position (the index becomes the sub key), and a scalar yields a single
    record without a sub key.
    """
    if isinstance(raw, Composite):
        return [
            AttributeRecord(bean_name=bean, attribute_name=attribute, sub_key=key, value=raw.fields[key])
            for key in sorted(raw.fields)
        ]
    if isinstance(raw, Sequence):
        return [
            AttributeRecord(bean_name=bean, attribute_name=attribute, sub_key=str(index), value=item)
            for index, item in enumerate(raw.items)
        ]
    if isinstance(raw, Scalar):
        return [AttributeRecord(bean_name=bean, attribute_name=attribute, value=raw.text)]
    raise TypeError(f"Unsupported raw value: {raw!r}")


def filter_by_type(records: list[AttributeRecord], type_filter: str) -> list[AttributeRecord]:
    return [record for record in records if record.sub_key == type_filter]
