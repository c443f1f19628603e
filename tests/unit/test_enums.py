"""Tests for snmp_helper.core.enums."""
from snmp_helper.core.enums import DataType, Versions


class TestDataType:
    def test_universal_tags(self):
        assert DataType.Integer == 0x02
        assert DataType.OctetString == 0x04
        assert DataType.Null == 0x05
        assert DataType.ObjectIdentifier == 0x06

    def test_application_tags(self):
        assert DataType.IPAddress == 0x40
        assert DataType.Counter == 0x41
        assert DataType.Gauge == 0x42
        assert DataType.TimeTicks == 0x43
        assert DataType.Counter64 == 0x46

    def test_exceptions(self):
        assert DataType.NoSuchObject.is_exception
        assert DataType.NoSuchInstance.is_exception
        assert DataType.EndOfMibView.is_exception
        assert not DataType.Null.is_exception
        assert not DataType.Integer.is_exception


class TestVersions:
    def test_values_match_mp_model(self):
        assert Versions.SNMPv1 == 0
        assert Versions.SNMPv2c == 1

    def test_label(self):
        assert Versions.SNMPv1.label == "1"
        assert Versions.SNMPv2c.label == "2c"
