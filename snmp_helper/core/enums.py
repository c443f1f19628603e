"""
Enumeration definitions for the SNMP helper.

All enums are defined here to maintain consistency and type safety.
"""
from enum import IntEnum


class DataType(IntEnum):
    """
    SNMP data-type tags — the BER identifier octet of each value type.

    Universal types use their ASN.1 tag number, SMI application types set
    the 0x40 class bit, and the SNMPv2 exception values set the 0x80
    context class bit.
    """

    Integer = 0x02
    OctetString = 0x04
    Null = 0x05
    ObjectIdentifier = 0x06
    Sequence = 0x30
    IPAddress = 0x40
    Counter = 0x41
    Gauge = 0x42
    TimeTicks = 0x43
    Opaque = 0x44
    NsapAddress = 0x45
    Counter64 = 0x46
    NoSuchObject = 0x80
    NoSuchInstance = 0x81
    EndOfMibView = 0x82
    PDUBase = 0xA0

    @property
    def is_exception(self) -> bool:
        """True for the varbind exception values (noSuchObject etc.)."""
        return self in (
            DataType.NoSuchObject,
            DataType.NoSuchInstance,
            DataType.EndOfMibView,
        )


class Versions(IntEnum):
    """
    SNMP protocol versions.

    Values match pysnmp's ``CommunityData(mpModel=...)``.
    """

    SNMPv1 = 0
    SNMPv2c = 1

    @property
    def label(self) -> str:
        """Short label used in logs: 1, 2c."""
        return {0: "1", 1: "2c"}[self.value]
