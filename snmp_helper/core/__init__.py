"""Core module - contains enums, shared types, and configuration."""
from .enums import DataType, Versions
from .config import settings
from .types import OID, RawVarBind, SnmpResult, VarBind

__all__ = [
    "DataType",
    "Versions",
    "OID",
    "RawVarBind",
    "SnmpResult",
    "VarBind",
    "settings",
]
