import logging
from typing import List, Optional

from .alphabet import ALPHABET_SIZE, PRINTABLE, Alphabet

logger = logging.getLogger(__name__)

BASE = ALPHABET_SIZE
MAX_PAIR_VALUE = BASE * BASE - 1
# (94 * 94 - 1) & 0x1FFF; pair values whose low 13 bits exceed this carry 13 bits
WIDTH_THRESHOLD = MAX_PAIR_VALUE & 0x1FFF

MASK_13 = 0x1FFF
MASK_14 = 0x3FFF


class Base94MaxError(ValueError):
    """Base class for all codec failures."""


class InvalidCharacter(Base94MaxError):
    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(
            f"Invalid character in Base94Max string at position {position}: {char!r}"
        )


class InvalidPadding(Base94MaxError):
    def __init__(self, residual: int):
        self.residual = residual
        super().__init__(
            f"Invalid Base94Max padding (residual bits {residual:#x} left in buffer)"
        )


class InvalidText(Base94MaxError):
    pass


class InvalidInputType(Base94MaxError, TypeError):
    pass


def pair_width(value: int) -> int:
    """Number of payload bits carried by a digit pair with combined ``value``."""
    if value < 0 or value > MAX_PAIR_VALUE:
        raise ValueError(f"pair value {value} out of range 0..{MAX_PAIR_VALUE}")
    return 13 if (value & MASK_13) > WIDTH_THRESHOLD else 14


def _encode_bytes(data: bytes, alphabet: Alphabet) -> str:
    chars = alphabet.chars
    bit_buf = 0
    bit_count = 0
    out: List[str] = []

    for byte in data:
        bit_buf |= byte << bit_count
        bit_count += 8

        while bit_count >= 14:
            block = bit_buf & MASK_13
            if block > WIDTH_THRESHOLD:
                bit_buf >>= 13
                bit_count -= 13
            else:
                block = bit_buf & MASK_14
                bit_buf >>= 14
                bit_count -= 14
            out.append(chars[block % BASE])
            out.append(chars[block // BASE])

    if bit_count > 0:
        out.append(chars[bit_buf % BASE])
        # A lone trailing digit may only stand for at most one byte of small value
        if bit_buf >= BASE or bit_count > 8:
            out.append(chars[bit_buf // BASE])

    return "".join(out)


def _decode_string(text: str, alphabet: Alphabet) -> bytes:
    lookup = alphabet.decode_map
    bit_buf = 0
    bit_count = 0
    pending: Optional[int] = None
    out = bytearray()

    for position, char in enumerate(text):
        value = lookup.get(char)
        if value is None:
            raise InvalidCharacter(char, position)

        if pending is None:
            pending = value
            continue

        v = pending + value * BASE
        pending = None

        bit_buf |= v << bit_count
        bit_count += 13 if (v & MASK_13) > WIDTH_THRESHOLD else 14

        while bit_count >= 8:
            out.append(bit_buf & 0xFF)
            bit_buf >>= 8
            bit_count -= 8

    if pending is not None:
        bit_buf |= pending << bit_count
        out.append(bit_buf & 0xFF)
        bit_buf >>= 8

    if bit_buf != 0:
        raise InvalidPadding(bit_buf)

    return bytes(out)


def encode(data: bytes, alphabet: Alphabet = PRINTABLE) -> str:
    """Encode binary ``data`` into a string over ``alphabet``.

    Input bits are grouped 13 or 14 at a time and each group becomes a
    little-endian pair of base-94 digits. The group width is never stored:
    it is recovered from the pair value itself during decoding. A final
    unpaired digit holds at most one byte's worth of leftover bits.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidInputType(
            f"Input must be a bytes-like object, got {type(data).__name__}"
        )
    if isinstance(data, memoryview):
        data = data.tobytes()
    logger.debug("Encoding %d bytes with alphabet %r", len(data), alphabet.name)
    return _encode_bytes(data, alphabet)


def decode(text: str, alphabet: Alphabet = PRINTABLE) -> bytes:
    """Decode a string produced by :func:`encode` back into bytes.

    Raises :class:`InvalidCharacter` for a character outside ``alphabet``
    and :class:`InvalidPadding` when bits are left over after the last
    digit, which is what truncated or edited input looks like.
    """
    if not isinstance(text, str):
        raise InvalidInputType(f"Input must be a string, got {type(text).__name__}")
    logger.debug("Decoding %d characters with alphabet %r", len(text), alphabet.name)
    return _decode_string(text, alphabet)


def encode_text(text: str, alphabet: Alphabet = PRINTABLE) -> str:
    if not isinstance(text, str):
        raise InvalidInputType(f"Input must be a string, got {type(text).__name__}")
    return encode(text.encode("utf-8"), alphabet)


def decode_text(text: str, alphabet: Alphabet = PRINTABLE) -> str:
    data = decode(text, alphabet)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidText("Decoded data is not valid UTF-8 text.") from exc


__all__ = [
    "BASE",
    "MAX_PAIR_VALUE",
    "WIDTH_THRESHOLD",
    "Base94MaxError",
    "InvalidCharacter",
    "InvalidPadding",
    "InvalidText",
    "InvalidInputType",
    "pair_width",
    "encode",
    "decode",
    "encode_text",
    "decode_text",
]
