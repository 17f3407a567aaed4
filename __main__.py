"""CLI shim for running the codec directly from the repository checkout."""

from base94max.cli import main
from base94max.codec import (
    BASE,
    WIDTH_THRESHOLD,
    decode,
    decode_text,
    encode,
    encode_text,
)

__all__ = [
    "BASE",
    "WIDTH_THRESHOLD",
    "decode",
    "decode_text",
    "encode",
    "encode_text",
    "main",
]


if __name__ == "__main__":
    main()
