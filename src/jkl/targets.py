"""Parsing of tab-delimited target specifications."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from jkl.exceptions import MalformedTargetError
from jkl.schema import Target

TAB_ESCAPE = "\\t"


def parse_target(raw: str) -> Target:
    """Parse ``BEAN\\tATTRIBUTE[\\tTYPE][\\tALIAS]`` into a Target.

    A literal backslash-t sequence is accepted in place of a tab character.
    A blank TYPE means no type filter; an ALIAS field, even an empty one,
    overrides the output header.

    Raises:
        MalformedTargetError: If bean or attribute is missing.
    """
    fields = raw.replace(TAB_ESCAPE, "\t").split("\t")
    if len(fields) < 2:
        raise MalformedTargetError(f"Target must be splittable by tab character ({raw}).")

    bean, attribute = fields[0], fields[1]
    if not bean or not attribute:
        raise MalformedTargetError(f"Target requires bean and attribute ({raw}).")

    type_filter = fields[2] if len(fields) > 2 else None
    alias = fields[3] if len(fields) > 3 else None
    return Target(bean=bean, attribute=attribute, type_filter=type_filter, alias=alias)


def parse_target_file(lines: Iterable[str]) -> list[Target]:
    """Parse one target per line. Trailing blank lines are ignored."""
    stripped = [line.rstrip("\r\n") for line in lines]
    while stripped and not stripped[-1].strip():
        stripped.pop()

    targets = []
    for number, line in enumerate(stripped, start=1):
        try:
            targets.append(parse_target(line))
        except MalformedTargetError as e:
            raise MalformedTargetError(f"Invalid target at line {number}: {e}") from e
    return targets


def load_target_file(path: str | Path) -> list[Target]:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedTargetError(f"Cannot read target file ({path}).") from e
    return parse_target_file(text.splitlines())
