from solkit.base58 import b58decode
from solkit.curve import is_on_curve

IDENTITY = b"\x01" + bytes(31)
BASE_POINT = b"\x58" + b"\x66" * 31


def test_identity_point_is_on_curve():
    assert is_on_curve(IDENTITY) is True


def test_base_point_is_on_curve():
    assert is_on_curve(BASE_POINT) is True


def test_sign_bit_does_not_change_membership():
    flipped = BASE_POINT[:31] + bytes([BASE_POINT[31] | 0x80])
    assert is_on_curve(flipped) == is_on_curve(BASE_POINT)


def test_known_program_address_is_off_curve():
    address = b58decode("65JQyZBU2RzNpP9vTdW5zSzujZR5JHZyChJsDWvkbM8u")
    assert len(address) == 32
    assert is_on_curve(address) is False


def test_wrong_length_is_rejected():
    assert is_on_curve(IDENTITY[:31]) is False
    assert is_on_curve(IDENTITY + b"\x00") is False


def test_accepts_bytearray():
    assert is_on_curve(bytearray(BASE_POINT)) is True