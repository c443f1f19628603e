"""Pydantic schemas for per-call SNMP options."""
from .options import SessionOptions

__all__ = [
    "SessionOptions",
]
