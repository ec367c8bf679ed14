"""Transports for jkl."""

from jkl.transports.base import BaseTransport
from jkl.transports.jolokia import JolokiaTransport

__all__ = ["BaseTransport", "JolokiaTransport"]
