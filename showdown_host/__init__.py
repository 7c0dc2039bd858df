"""Deal host package: serves single deals over WebSockets."""

from .records import ResultLog, ResultRecord
from .server import DealServer

__all__ = ["DealServer", "ResultLog", "ResultRecord"]
