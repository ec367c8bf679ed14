"""Custom exceptions for jkl."""


class JklError(Exception):
    """Base exception for jkl."""

    pass


class JmxConnectionError(JklError):
    """Raised when the JMX endpoint cannot be resolved or reached."""

    pass


class NotFoundError(JklError):
    """Raised when a bean or attribute name does not exist on the server."""

    pass


class RetrievalError(JklError):
    """Raised when the server fails to return a value for another reason."""

    pass


class TypeFilterEmptyError(JklError):
    """Raised when a type filter matches none of the flattened records."""

    pass


class MalformedTargetError(JklError):
    """Raised when a target does not hold at least bean and attribute."""

    pass


class ConfigurationConflictError(JklError):
    """Raised when mutually exclusive inputs are given together."""

    pass
