import argparse
import logging
import sys
from typing import List, Optional

from .alphabet import VARIANTS, Alphabet, get_variant, load_alphabet, save_alphabet
from .codec import decode, decode_text, encode, encode_text

logger = logging.getLogger(__name__)


def _read_bytes(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def _read_text(path: str) -> str:
    # Raw bytes so line endings reach the codec unchanged
    return _read_bytes(path).decode("utf-8")


def _write_bytes(path: str, data: bytes) -> None:
    if path == "-":
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    else:
        with open(path, "wb") as f:
            f.write(data)


def _write_text(path: str, text: str) -> None:
    if path == "-":
        sys.stdout.write(text)
        sys.stdout.flush()
    else:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Encode binary data as Base94Max text and back"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--mode",
        "-m",
        choices=sorted(VARIANTS),
        default="printable",
        help="Encoding variant (character set)",
    )
    common.add_argument(
        "--alphabet-file",
        help="Path to a JSON alphabet file (overrides --mode)",
    )
    common.add_argument("--verbose", "-v", action="store_true")

    enc = subparsers.add_parser("encode", parents=[common])
    enc.add_argument("--input", default="-", help="Input path, '-' for stdin")
    enc.add_argument("--output", default="-", help="Output path, '-' for stdout")
    enc.add_argument(
        "--charset",
        "-c",
        choices=["utf8", "bin"],
        default="utf8",
        help="Treat input data as UTF-8 text or raw bytes",
    )
    enc.add_argument(
        "--newline",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Append a newline after the encoded text",
    )

    dec = subparsers.add_parser("decode", parents=[common])
    dec.add_argument("--input", default="-", help="Input path, '-' for stdin")
    dec.add_argument("--output", default="-", help="Output path, '-' for stdout")
    dec.add_argument(
        "--charset",
        "-c",
        choices=["utf8", "bin"],
        default="utf8",
        help="Write decoded data as UTF-8 text or raw bytes",
    )

    save = subparsers.add_parser("save-alphabet", parents=[common])
    save.add_argument("--output", required=True, help="Path of the JSON file to write")

    return parser


def resolve_alphabet(args) -> Alphabet:
    if args.alphabet_file:
        return load_alphabet(args.alphabet_file)
    return get_variant(args.mode)


def run_encode(args) -> None:
    alphabet = resolve_alphabet(args)
    if args.charset == "bin":
        encoded = encode(_read_bytes(args.input), alphabet)
    else:
        encoded = encode_text(_read_text(args.input), alphabet)
    logger.debug("Produced %d characters", len(encoded))
    if args.newline:
        encoded += "\n"
    _write_text(args.output, encoded)


def run_decode(args) -> None:
    alphabet = resolve_alphabet(args)
    # Line endings added by editors or by `encode --newline` are not payload
    encoded = _read_text(args.input).rstrip("\r\n")
    if args.charset == "bin":
        data = decode(encoded, alphabet)
        logger.debug("Recovered %d bytes", len(data))
        _write_bytes(args.output, data)
    else:
        _write_text(args.output, decode_text(encoded, alphabet))


def run_save_alphabet(args) -> None:
    alphabet = resolve_alphabet(args)
    save_alphabet(alphabet, args.output)
    logger.debug("Wrote alphabet %r to %s", alphabet.name, args.output)


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "encode":
            run_encode(args)
        elif args.command == "decode":
            run_decode(args)
        elif args.command == "save-alphabet":
            run_save_alphabet(args)
        else:
            parser.error("Unknown command")
    except ValueError as exc:
        parser.error(str(exc))


__all__ = [
    "build_arg_parser",
    "resolve_alphabet",
    "run_encode",
    "run_decode",
    "run_save_alphabet",
    "main",
]
