"""Data models for jkl."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AttributeRecord(BaseModel):
    """One flattened scalar extracted from an attribute value."""

    model_config = ConfigDict(frozen=True)

    bean_name: str
    attribute_name: str
    sub_key: str | None = None
    value: str

    @property
    def header(self) -> str:
        """Key of the record: the sub key, or ``bean::attribute`` for scalars."""
        if self.sub_key is not None:
            return self.sub_key
        return f"{self.bean_name}::{self.attribute_name}"


class Target(BaseModel):
    """A requested lookup of one attribute."""

    model_config = ConfigDict(frozen=True)

    bean: str = Field(min_length=1)
    attribute: str = Field(min_length=1)
    type_filter: str | None = None
    alias: str | None = None

    @field_validator("type_filter")
    @classmethod
    def _blank_type_is_no_filter(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value


class EvaluatedTarget(BaseModel):
    """A target with its resolved records.

    ``None`` inside ``records`` is the absent placeholder substituted for a
    target that could not be resolved in tolerant mode.
    """

    model_config = ConfigDict(frozen=True)

    target: Target
    records: list[AttributeRecord | None] = Field(default_factory=list)

    def header_for(self, record: AttributeRecord | None) -> str:
        if self.target.alias is not None:
            return self.target.alias
        if record is None:
            return ""
        return record.header
