import pytest

from messaging.errors import InvalidArgumentError
from messaging.phone_number import PhoneNumber


def test_national_number_only():
    p = PhoneNumber(" 13800000000 ")
    assert p.number == "13800000000"
    assert p.universal_number == "13800000000"
    assert str(p) == "13800000000"
    assert p.in_china_mainland()


def test_idd_code_forms_are_normalized():
    for code in ("86", "+86", "0086", 86):
        p = PhoneNumber("13800000000", code)
        assert p.idd_code == "86"
        assert p.universal_number == "+8613800000000"
        assert p.zero_prefixed_number == "008613800000000"


def test_foreign_number():
    p = PhoneNumber("2025550100", "1")
    assert not p.in_china_mainland()
    assert str(p) == "+12025550100"


def test_coerce():
    p = PhoneNumber("1")
    assert PhoneNumber.coerce(p) is p
    assert PhoneNumber.coerce("13800000000", "86").universal_number == "+8613800000000"
    with pytest.raises(InvalidArgumentError):
        PhoneNumber.coerce(None)
