"""Jolokia (JMX over HTTP/JSON) transport implementation."""

from __future__ import annotations

import base64
import json
import logging
from http.client import HTTPException
from urllib import error, request

from jkl.config import ClientConfig
from jkl.exceptions import JmxConnectionError, NotFoundError, RetrievalError
from jkl.normalization import Composite, RawValue, Scalar, Sequence
from jkl.transports.base import BaseTransport

_BEAN_NOT_FOUND_TYPES = (
    "javax.management.InstanceNotFoundException",
    "javax.management.MalformedObjectNameException",
)
_ATTRIBUTE_NOT_FOUND_TYPES = ("javax.management.AttributeNotFoundException",)


class JolokiaTransport(BaseTransport):
    """Talks to a Jolokia agent attached to the JVM."""

    def __init__(self, host: str, port: int, *, config: ClientConfig | None = None):
        self.config = config or ClientConfig()
        self.location = f"{host}:{port}"
        self.url = f"{self.config.scheme}://{host}:{port}{self.config.jolokia_path}"
        self.logger = logging.getLogger(__name__)

    def version(self) -> str:
        response = self._call({"type": "version"})
        if response.get("status") != 200:
            raise JmxConnectionError(
                f"Cannot connect jmx server ({self.location}): {response.get('error')}"
            )
        value = response.get("value") or {}
        return str(value.get("agent", "")) if isinstance(value, dict) else str(value)

    def search_names(self) -> list[str]:
        response = self._call({"type": "search", "mbean": "*:*"})
        if response.get("status") != 200:
            raise RetrievalError("Cannot retrieve mbean.")
        return [str(name) for name in response.get("value") or []]

    def list_attribute_names(self, bean: str) -> list[str]:
        path = _list_path(bean)
        response = self._call({"type": "list", "path": path})
        status = response.get("status")
        if status in (400, 404):
            raise NotFoundError(f"Invalid mbean name specified ({bean}).")
        if status != 200:
            raise RetrievalError(f"Cannot retrieve mbean ({bean}).")
        value = response.get("value")
        if not isinstance(value, dict):
            raise NotFoundError(f"Invalid mbean name specified ({bean}).")
        return [str(name) for name in value.get("attr") or {}]

    def read_attribute(self, bean: str, attribute: str) -> RawValue:
        _parse_object_name(bean)
        if "*" in bean or "?" in bean:
            raise RetrievalError(f"Cannot retrieve value ({bean}::{attribute}).")
        response = self._call({"type": "read", "mbean": bean, "attribute": attribute})
        if response.get("status") == 200:
            return _to_raw_value(response.get("value"))

        error_type = response.get("error_type") or ""
        if error_type in _BEAN_NOT_FOUND_TYPES:
            raise NotFoundError(f"Invalid mbean name specified ({bean}).")
        if error_type in _ATTRIBUTE_NOT_FOUND_TYPES:
            raise NotFoundError(f"Invalid attribute name specified ({bean}::{attribute}).")
        raise RetrievalError(f"Cannot retrieve value ({bean}::{attribute}).")

    def _call(self, payload: dict) -> dict:
        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        headers = {"Content-Type": "application/json"}
        if self.config.username:
            credentials = f"{self.config.username}:{self.config.password or ''}"
            headers["Authorization"] = "Basic " + base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        req = request.Request(
            self.url,
            data=data,
            headers=headers,
            method="POST",
        )

        self.logger.debug("jolokia request: %s", payload)
        try:
            with request.urlopen(req, timeout=self.config.timeout_sec) as response:
                body = response.read()
        except error.HTTPError as e:
            if e.code in (401, 403):
                raise JmxConnectionError(f"Authentication failed ({self.location}).") from e
            raise JmxConnectionError(f"Cannot connect jmx server ({self.location}): HTTP {e.code}.") from e
        except ValueError as e:
            raise JmxConnectionError(f"Invalid host or port specified ({self.location}).") from e
        except (error.URLError, HTTPException, OSError) as e:
            raise JmxConnectionError(f"Cannot connect jmx server ({self.location}).") from e

        try:
            result = json.loads(body.decode("utf-8"))
        except ValueError as e:
            raise JmxConnectionError(f"Invalid response from jmx server ({self.location}).") from e
        if not isinstance(result, dict):
            raise JmxConnectionError(f"Invalid response from jmx server ({self.location}).")
        self.logger.debug("jolokia response: %s", result)
        return result


def _to_raw_value(value) -> RawValue:
    if isinstance(value, dict):
        return Composite({str(key): _render(item) for key, item in value.items()})
    if isinstance(value, list):
        return Sequence([_render(item) for item in value])
    return Scalar(_render(value))


def _render(value) -> str:
    # Same text as the JVM String.valueOf of the value.
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def _parse_object_name(name: str) -> tuple[str, list[tuple[str, str]]]:
    domain, sep, properties = name.partition(":")
    if not sep or not properties:
        raise NotFoundError(f"Invalid mbean name specified ({name}).")

    pairs = []
    for prop in _split_properties(properties):
        key, eq, value = prop.partition("=")
        if not eq or not key:
            raise NotFoundError(f"Invalid mbean name specified ({name}).")
        pairs.append((key, value))
    return domain, pairs


def _split_properties(properties: str) -> list[str]:
    """Split a key property list on commas outside quoted values."""
    parts: list[str] = []
    current: list[str] = []
    quoted = False
    escaped = False
    for char in properties:
        if escaped:
            escaped = False
        elif char == "\\" and quoted:
            escaped = True
        elif char == '"':
            quoted = not quoted
        elif char == "," and not quoted:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def _list_path(bean: str) -> str:
    domain, pairs = _parse_object_name(bean)
    canonical = ",".join(f"{key}={value}" for key, value in sorted(pairs))
    return f"{_escape_path(domain)}/{_escape_path(canonical)}"


def _escape_path(segment: str) -> str:
    return segment.replace("!", "!!").replace("/", "!/")
