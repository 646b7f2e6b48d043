"""
Table controller: lifecycle, fetch orchestration and the imperative handle.
"""

from .controller import FETCH_FIELDS, ControllerStatus, TableController
from .fetch import FetchCallback, FetchRequest
from .handle import TableHandle

__all__ = [
    "FETCH_FIELDS",
    "ControllerStatus",
    "FetchCallback",
    "FetchRequest",
    "TableController",
    "TableHandle",
]
