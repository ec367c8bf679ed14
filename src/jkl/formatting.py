"""Rendering of names and evaluated targets as text lines."""

from __future__ import annotations

from collections.abc import Iterable

from jkl.schema import EvaluatedTarget

OUTPUT_FORMATS = ("csv", "list")


def escape_field(field: str | None, *, delimiter: str = ",", raw: bool = False) -> str:
    """Quote a csv field when it holds the delimiter, a double quote or a space."""
    if field is None:
        return ""
    if raw:
        return field
    if delimiter in field or '"' in field or " " in field:
        return '"' + field.replace('"', '""') + '"'
    return field


def render_values(
    evaluated: Iterable[EvaluatedTarget],
    *,
    output: str = "csv",
    show_header: bool = False,
    use_tab: bool = False,
) -> list[str]:
    """Render evaluated targets.

    ``csv`` gives an optional header line and one value line; ``list`` gives
    one line per record, prefixed by its header and a tab when
    ``show_header`` is set. Absent placeholders render as empty strings.
    """
    delimiter = "\t" if use_tab else ","
    rows = [
        (item.header_for(record), record.value if record is not None else "")
        for item in evaluated
        for record in item.records
    ]

    if output == "csv":
        lines = []
        if show_header:
            lines.append(delimiter.join(escape_field(header, delimiter=delimiter, raw=use_tab) for header, _ in rows))
        lines.append(delimiter.join(escape_field(value, delimiter=delimiter, raw=use_tab) for _, value in rows))
        return lines
    if output == "list":
        if show_header:
            return [f"{header}\t{value}" for header, value in rows]
        return [value for _, value in rows]
    raise ValueError(f"Unsupported output format: {output}")


def render_names(
    names: Iterable[str],
    *,
    output: str = "csv",
    use_tab: bool = False,
    escape: bool = False,
) -> list[str]:
    """Render bean or attribute names. No header row applies."""
    names = list(names)
    delimiter = "\t" if use_tab else ","
    if output == "csv":
        if escape:
            names = [escape_field(name, delimiter=delimiter, raw=use_tab) for name in names]
        return [delimiter.join(names)]
    if output == "list":
        return names
    raise ValueError(f"Unsupported output format: {output}")
