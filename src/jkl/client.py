"""JMX client owning a single connection."""

from __future__ import annotations

import logging

from jkl.config import ClientConfig
from jkl.exceptions import JmxConnectionError
from jkl.normalization import RawValue
from jkl.transports.base import BaseTransport

logger = logging.getLogger(__name__)


class JmxClient:
    """Client connected to one JMX endpoint.

    The connection is established at construction time and must be closed;
    use the client as a context manager.

    Args:
        host: Hostname of the JMX agent.
        port: Port of the JMX agent.
        transport: Transport to use. Defaults to a Jolokia HTTP transport.
        config: Client configuration. Defaults to ``ClientConfig.from_env()``.

    Raises:
        JmxConnectionError: If the location is invalid or the connection
            cannot be made.
    """

    def __init__(
        self,
        host: str,
        port: int,
        *,
        transport: BaseTransport | None = None,
        config: ClientConfig | None = None,
    ):
        self.host = host
        self.port = port
        self._closed = False
        self._transport = transport
        location = f"{host}:{port}"
        logger.debug("INITIALIZING: start %s.", location)
        if not host or not 0 < port < 65536:
            self.close()
            raise JmxConnectionError(f"Invalid host or port specified ({location}).")

        if transport is None:
            from jkl.transports.jolokia import JolokiaTransport

            transport = JolokiaTransport(host, port, config=config or ClientConfig.from_env())
        self._transport = transport

        try:
            version = self._transport.version()
        except JmxConnectionError:
            self.close()
            raise
        except Exception as e:
            self.close()
            raise JmxConnectionError(f"Cannot connect jmx server ({location}).") from e
        logger.debug("INITIALIZING: done (agent %s).", version)

    def list_beans(self) -> list[str]:
        """Return the names of all beans, sorted alphabetically."""
        logger.debug("GET BEANS: start.")
        result = sorted(self._transport.search_names())
        logger.debug("GET BEANS: %s", result)
        return result

    def list_attribute_names(self, bean: str) -> list[str]:
        """Return the attribute names of ``bean`` in server order.

        Raises:
            NotFoundError: If the bean does not exist.
        """
        logger.debug("GET BEAN ATTRIBUTES: start (%s).", bean)
        result = self._transport.list_attribute_names(bean)
        logger.debug("GET BEAN ATTRIBUTES: %s.", result)
        return result

    def fetch_raw_value(self, bean: str, attribute: str) -> RawValue:
        """Fetch one attribute value without flattening it.

        Raises:
            NotFoundError: If the bean or attribute does not exist.
            JmxConnectionError: On transport failure.
        """
        logger.debug("GET VALUE: start (%s::%s).", bean, attribute)
        value = self._transport.read_attribute(bean, attribute)
        logger.debug("GET VALUE: %s.", value)
        return value

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._transport is not None:
            self._transport.close()

    def __enter__(self) -> "JmxClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"
