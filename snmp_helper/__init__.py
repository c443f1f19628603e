"""SNMP helper - result maps keyed by canonical OID over pysnmp."""
from .core.enums import DataType, Versions
from .core.types import VarBind
from .schemas.options import SessionOptions
from .snmp import shared
from .snmp.aggregator import TransportError
from .snmp.client import SnmpClient
from .snmp.engine import SessionClosedError

__version__ = "1.0.0"

__all__ = [
    "DataType",
    "SessionClosedError",
    "SessionOptions",
    "SnmpClient",
    "TransportError",
    "VarBind",
    "Versions",
    "shared",
]
