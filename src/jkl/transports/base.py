"""Base transport interface."""

from abc import ABC, abstractmethod

from jkl.normalization import RawValue


class BaseTransport(ABC):
    """Abstract base class for JMX transports.

    Implementations raise ``JmxConnectionError`` for transport failures and
    ``NotFoundError`` for names the server does not know.
    """

    @abstractmethod
    def version(self) -> str:
        """Return the agent version. Used to check the endpoint is reachable."""
        pass

    @abstractmethod
    def search_names(self) -> list[str]:
        """Return the names of all registered beans, in server order."""
        pass

    @abstractmethod
    def list_attribute_names(self, bean: str) -> list[str]:
        """Return the attribute names of a bean, in server order."""
        pass

    @abstractmethod
    def read_attribute(self, bean: str, attribute: str) -> RawValue:
        """Fetch one attribute value.

        Args:
            bean: ObjectName of the bean
            attribute: Attribute name

        Returns:
            The value as a Scalar, Composite or Sequence
        """
        pass

    def close(self) -> None:
        """Release underlying resources."""
        return None
