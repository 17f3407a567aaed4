"""Binary-to-text encoding over a 94-character printable alphabet."""

from .alphabet import (
    JSON_DELETE,
    PRINTABLE,
    VARIANTS,
    Alphabet,
    get_variant,
    load_alphabet,
    save_alphabet,
)
from .codec import (
    Base94MaxError,
    InvalidCharacter,
    InvalidInputType,
    InvalidPadding,
    InvalidText,
    decode,
    decode_text,
    encode,
    encode_text,
    pair_width,
)

__all__ = [
    "Alphabet",
    "Base94MaxError",
    "InvalidCharacter",
    "InvalidInputType",
    "InvalidPadding",
    "InvalidText",
    "JSON_DELETE",
    "PRINTABLE",
    "VARIANTS",
    "decode",
    "decode_text",
    "encode",
    "encode_text",
    "get_variant",
    "load_alphabet",
    "pair_width",
    "save_alphabet",
]

__version__ = "0.1.0"
