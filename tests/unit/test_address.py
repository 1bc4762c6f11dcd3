import pytest

from orderbook_notifier.constants import ZERO_ADDRESS
from orderbook_notifier.logic.address import has_exclusive_filler


@pytest.mark.parametrize(
    "filler, expected",
    [
        ("0x1111111111111111111111111111111111111111", True),
        ("0xABCDEF0000000000000000000000000000000001", True),
        (ZERO_ADDRESS, False),
        (ZERO_ADDRESS.upper().replace("0X", "0x"), False),
        ("", False),
        (None, False),
    ],
)
def test_has_exclusive_filler(filler, expected):
    assert has_exclusive_filler(filler) is expected
