import dataclasses
import json
import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 94


@dataclasses.dataclass(frozen=True)
class Alphabet:
    """Bijection between the values 0-93 and 94 distinct characters.

    ``chars[i]`` is the character for value ``i``. The reverse lookup is
    derived once at construction and is read-only afterwards, so a single
    instance can be shared freely between callers.
    """

    chars: str
    name: str = "custom"
    decode_map: Mapping[str, int] = dataclasses.field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.chars, str):
            raise ValueError("alphabet chars must be a string")
        if len(self.chars) != ALPHABET_SIZE:
            raise ValueError(
                f"alphabet must have exactly {ALPHABET_SIZE} characters, got {len(self.chars)}"
            )
        lookup: Dict[str, int] = {}
        for value, char in enumerate(self.chars):
            code = ord(char)
            if code < 32 or code > 127:
                raise ValueError(
                    f"alphabet character {char!r} at index {value} is outside ASCII 32-127"
                )
            if char in lookup:
                raise ValueError(
                    f"duplicate alphabet character {char!r} at index {value}"
                )
            lookup[char] = value
        object.__setattr__(self, "decode_map", MappingProxyType(lookup))

    def encode_value(self, value: int) -> str:
        if value < 0 or value >= ALPHABET_SIZE:
            raise ValueError(f"value {value} out of range for base {ALPHABET_SIZE}")
        return self.chars[value]

    def decode_char(self, char: str) -> Optional[int]:
        return self.decode_map.get(char)

    def to_dict(self) -> dict:
        return {
            "version": "v1",
            "name": self.name,
            "chars": self.chars,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Alphabet":
        version = data.get("version", "v1")
        if version != "v1":
            raise ValueError(f"Unsupported alphabet version: {version}")
        if "chars" not in data:
            raise ValueError("alphabet data is missing 'chars'")
        name = data.get("name") or "custom"
        chars = data["chars"]
        builtin = VARIANTS.get(name)
        if builtin is not None and builtin.chars == chars:
            return builtin
        # Only the built-in variants may use space or DEL
        if isinstance(chars, str):
            for index, char in enumerate(chars):
                if not 33 <= ord(char) <= 126:
                    raise ValueError(
                        f"alphabet character {char!r} at index {index} is not "
                        "printable non-space ASCII"
                    )
        return cls(chars=chars, name=name)


def save_alphabet(alphabet: Alphabet, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(alphabet.to_dict(), f, indent=2)
        f.write("\n")


def load_alphabet(path: str) -> Alphabet:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    alphabet = Alphabet.from_dict(raw)
    logger.debug("Loaded alphabet %r from %s", alphabet.name, path)
    return alphabet


# '!' through '~'
PRINTABLE = Alphabet(
    chars="".join(chr(code) for code in range(33, 127)),
    name="printable",
)

# Space through DEL, minus the two characters a JSON string literal must escape
JSON_DELETE = Alphabet(
    chars="".join(chr(code) for code in range(32, 128) if chr(code) not in "\"\\"),
    name="json-delete",
)

VARIANTS: Mapping[str, Alphabet] = MappingProxyType(
    {
        PRINTABLE.name: PRINTABLE,
        JSON_DELETE.name: JSON_DELETE,
    }
)


def get_variant(name: str) -> Alphabet:
    try:
        return VARIANTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown alphabet variant {name!r}; expected one of: {', '.join(VARIANTS)}"
        ) from None


__all__ = [
    "ALPHABET_SIZE",
    "Alphabet",
    "JSON_DELETE",
    "PRINTABLE",
    "VARIANTS",
    "get_variant",
    "load_alphabet",
    "save_alphabet",
]
