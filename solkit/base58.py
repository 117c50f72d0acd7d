"""Base58 encoding with the Bitcoin alphabet, as used for account addresses."""

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

_INDEX = {char: value for value, char in enumerate(ALPHABET)}


def b58encode(data: bytes) -> str:
    """Encode bytes as a base58 string; each leading zero byte becomes '1'."""
    data = bytes(data)
    stripped = data.lstrip(b"\0")
    leading_zeros = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(ALPHABET[remainder])
    return ALPHABET[0] * leading_zeros + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode a base58 string; raise ValueError on a character outside the alphabet."""
    number = 0
    for char in text:
        try:
            value = _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
        number = number * 58 + value
    leading_ones = len(text) - len(text.lstrip(ALPHABET[0]))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\0" * leading_ones + body