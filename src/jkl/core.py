"""Query planning and attribute evaluation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import ValidationError

from jkl.client import JmxClient
from jkl.config import ClientConfig
from jkl.exceptions import ConfigurationConflictError, JklError, MalformedTargetError, TypeFilterEmptyError
from jkl.normalization import filter_by_type, normalize_value
from jkl.schema import AttributeRecord, EvaluatedTarget, Target
from jkl.targets import load_target_file, parse_target

logger = logging.getLogger(__name__)


class EvaluationMode(Enum):
    """Failure policy applied while evaluating targets."""

    FAIL_FAST = "fail_fast"
    TOLERANT = "tolerant"


class QueryKind(Enum):
    PING = "ping"
    BEANS = "beans"
    ATTRIBUTE_NAMES = "attribute_names"
    VALUES = "values"


@dataclass(frozen=True)
class Query:
    kind: QueryKind
    bean: str | None = None
    targets: tuple[Target, ...] = ()
    mode: EvaluationMode = EvaluationMode.FAIL_FAST


def plan_query(
    bean: str | None = None,
    attribute: str | None = None,
    type_filter: str | None = None,
    targets: Iterable[str] = (),
    target_file: str | Path | None = None,
    *,
    ping: bool = False,
    show_header: bool = False,
) -> Query:
    """Validate the combination of inputs and decide what to run.

    Nothing here touches the network, so conflicting or malformed input is
    reported before a connection is made.

    Raises:
        ConfigurationConflictError: If mutually exclusive inputs are combined.
        MalformedTargetError: If a target lacks bean or attribute.
        TypeFilterEmptyError: If an explicit TYPE argument is blank.
    """
    raw_targets = list(targets)
    if raw_targets and target_file is not None:
        raise ConfigurationConflictError("Cannot specify '--target' option and '--file' option together.")

    parsed = [parse_target(raw) for raw in raw_targets]
    if target_file is not None:
        parsed = load_target_file(target_file)

    explicit = bean is not None or attribute is not None or type_filter is not None
    if explicit and (parsed or target_file is not None):
        raise ConfigurationConflictError(
            "Cannot specify BEAN or ATTRIBUTE argument with '--target' or '--file' option."
        )
    if type_filter is not None and attribute is None:
        raise ConfigurationConflictError("Cannot specify TYPE argument without ATTRIBUTE argument.")
    if attribute is not None and bean is None:
        raise ConfigurationConflictError("Cannot specify ATTRIBUTE argument without BEAN argument.")
    if show_header and attribute is None and not parsed:
        raise ConfigurationConflictError(
            "Cannot specify '--show-keys' without attribute or '--target' or '--file' option."
        )

    if ping:
        return Query(kind=QueryKind.PING)
    if bean is not None and attribute is None:
        return Query(kind=QueryKind.ATTRIBUTE_NAMES, bean=bean)
    if bean is not None:
        target = _explicit_target(bean, attribute, type_filter)
        return Query(kind=QueryKind.VALUES, targets=(target,), mode=EvaluationMode.FAIL_FAST)
    if parsed:
        return Query(kind=QueryKind.VALUES, targets=tuple(parsed), mode=EvaluationMode.TOLERANT)
    return Query(kind=QueryKind.BEANS)


def _explicit_target(bean: str, attribute: str, type_filter: str | None) -> Target:
    # A blank TYPE argument can never match a sub key.
    if type_filter is not None and not type_filter.strip():
        raise TypeFilterEmptyError(f"Invalid type specified ({bean}::{attribute}::{type_filter}).")
    try:
        return Target(bean=bean, attribute=attribute, type_filter=type_filter)
    except ValidationError as e:
        raise MalformedTargetError(f"BEAN and ATTRIBUTE must not be empty ({bean}::{attribute}).") from e


def fetch_values(client: JmxClient, bean: str, attribute: str) -> list[AttributeRecord]:
    """Fetch one attribute and flatten it into records."""
    raw = client.fetch_raw_value(bean, attribute)
    return normalize_value(bean, attribute, raw)


def fetch_typed_values(client: JmxClient, bean: str, attribute: str, type_filter: str) -> list[AttributeRecord]:
    """Fetch one attribute and keep only the records whose sub key is ``type_filter``.

    Raises:
        TypeFilterEmptyError: If no record matches.
    """
    records = filter_by_type(fetch_values(client, bean, attribute), type_filter)
    if not records:
        raise TypeFilterEmptyError(f"Invalid type specified ({bean}::{attribute}::{type_filter}).")
    return records


def evaluate_target(client: JmxClient, target: Target, mode: EvaluationMode) -> EvaluatedTarget:
    try:
        if target.type_filter:
            records = fetch_typed_values(client, target.bean, target.attribute, target.type_filter)
        else:
            records = fetch_values(client, target.bean, target.attribute)
    except JklError as e:
        if mode is EvaluationMode.FAIL_FAST:
            raise
        logger.debug("no value for %s::%s, left empty: %s", target.bean, target.attribute, e)
        return EvaluatedTarget(target=target, records=[None])
    return EvaluatedTarget(target=target, records=records)


def evaluate_targets(
    client: JmxClient,
    targets: Iterable[Target],
    mode: EvaluationMode = EvaluationMode.TOLERANT,
) -> list[EvaluatedTarget]:
    """Evaluate targets one at a time, in declaration order.

    In ``TOLERANT`` mode a target that fails is replaced by a single absent
    placeholder and evaluation goes on; in ``FAIL_FAST`` mode the first
    failure is raised.
    """
    return [evaluate_target(client, target, mode) for target in targets]


def run_query(client: JmxClient, query: Query) -> list[str] | list[EvaluatedTarget] | None:
    if query.kind is QueryKind.PING:
        return None
    if query.kind is QueryKind.BEANS:
        return client.list_beans()
    if query.kind is QueryKind.ATTRIBUTE_NAMES:
        return client.list_attribute_names(query.bean)
    return evaluate_targets(client, query.targets, query.mode)


def fetch(
    host: str,
    port: int,
    bean: str,
    attribute: str,
    type_filter: str | None = None,
    *,
    config: ClientConfig | None = None,
) -> list[AttributeRecord]:
    """Fetch the flattened value of one attribute from a JMX endpoint.

    Args:
        host: Hostname of the JMX agent.
        port: Port of the JMX agent.
        bean: ObjectName of the bean, e.g. ``java.lang:type=Memory``.
        attribute: Attribute name, e.g. ``HeapMemoryUsage``.
        type_filter: Sub key to keep, e.g. ``max``.
        config: Client configuration. Falls back to ``JKL_*`` env vars.

    Returns:
        Records of the attribute value. Any failure is raised.
    """
    with JmxClient(host, port, config=config) as client:
        if type_filter:
            return fetch_typed_values(client, bean, attribute, type_filter)
        return fetch_values(client, bean, attribute)


def fetch_targets(
    host: str,
    port: int,
    targets: Iterable[str | Target],
    *,
    config: ClientConfig | None = None,
) -> list[EvaluatedTarget]:
    """Fetch many targets; targets that cannot be resolved come back empty."""
    parsed = [target if isinstance(target, Target) else parse_target(target) for target in targets]
    with JmxClient(host, port, config=config) as client:
        return evaluate_targets(client, parsed, EvaluationMode.TOLERANT)
