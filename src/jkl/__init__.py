"""jkl: Command-line JMX client showing beans, attributes and values."""

from jkl.client import JmxClient
from jkl.core import EvaluationMode, fetch, fetch_targets
from jkl.schema import AttributeRecord, EvaluatedTarget, Target

__version__ = "1.0.0"

__all__ = [
    "fetch",
    "fetch_targets",
    "AttributeRecord",
    "EvaluatedTarget",
    "EvaluationMode",
    "JmxClient",
    "Target",
    "__version__",
]
