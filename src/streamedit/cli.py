from __future__ import annotations
import argparse, json, logging, sys
from typing import List, Optional

from .binary.codecs.byteorder import ByteOrder
from .binary.codecs.primitive import PRIMITIVES, Primitive, Value, primitive_named
from .binary.editor import RandomAccessBinaryEditor
from .binary.errors import StreamEditError
from .models.options import EditorOptions
from .models.reading import MediumInfo, PrimitiveReading

log = logging.getLogger(__name__)


def _open(path: str, opts: EditorOptions) -> RandomAccessBinaryEditor:
    return RandomAccessBinaryEditor.open(path, opts.byte_order, read_only=opts.read_only)

def _options(args, *, read_only: bool) -> EditorOptions:
    return EditorOptions(byte_order=args.order, read_only=read_only)

def _parse_value(p: Primitive, text: str) -> Value:
    if p.kind == "float":
        return float(text)
    if p.kind == "char":
        return text
    return int(text, 0)

def _dump(obj) -> None:
    print(json.dumps(obj, indent=2))


def cmd_info(args) -> int:
    with _open(args.input, EditorOptions(read_only=True)) as ed:
        _dump(MediumInfo(path=args.input, length=ed.length()).model_dump(mode="json"))
    return 0

def cmd_peek(args) -> int:
    p = primitive_named(args.type)
    out: List[dict] = []
    with _open(args.input, _options(args, read_only=True)) as ed:
        ed.seek(args.offset)
        for _ in range(args.count):
            offset = ed.tell()
            with ed.preserving_position():
                raw = ed.read_fully(p.width)
            value = ed.read_primitive(p)
            out.append(PrimitiveReading(
                offset=offset, type=p.name, byte_order=ed.byte_order,
                raw_hex=raw.hex(), value=value,
            ).model_dump(mode="json"))
    _dump(out)
    return 0

def cmd_poke(args) -> int:
    p = primitive_named(args.type)
    value = _parse_value(p, args.value)
    with _open(args.input, _options(args, read_only=False)) as ed:
        ed.seek(args.offset)
        ed.write_primitive(p, value)
        ed.seek(args.offset)
        with ed.preserving_position():
            raw = ed.read_fully(p.width)
        log.debug("wrote %s at %d: %s", p.name, args.offset, raw.hex())
        reading = PrimitiveReading(
            offset=args.offset, type=p.name, byte_order=ed.byte_order,
            raw_hex=raw.hex(), value=ed.peek_primitive(p),
        )
    _dump(reading.model_dump(mode="json"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="streamedit", description="Inspect and patch binary primitives in a file")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)
    types = [t.name for t in PRIMITIVES]
    orders = [o.value for o in ByteOrder]

    sp = sub.add_parser("info", help="print the file length as JSON")
    sp.add_argument("input")
    sp.set_defaults(func=cmd_info)

    sp = sub.add_parser("peek", help="decode primitives at an offset without modifying the file")
    sp.add_argument("input")
    sp.add_argument("type", choices=types)
    sp.add_argument("--offset", type=int, default=0)
    sp.add_argument("--count", type=int, default=1)
    sp.add_argument("--order", choices=orders, default=ByteOrder.LITTLE_ENDIAN.value)
    sp.set_defaults(func=cmd_peek)

    sp = sub.add_parser("poke", help="encode one primitive at an offset (extends the file if needed)")
    sp.add_argument("input")
    sp.add_argument("type", choices=types)
    sp.add_argument("value")
    sp.add_argument("--offset", type=int, default=0)
    sp.add_argument("--order", choices=orders, default=ByteOrder.LITTLE_ENDIAN.value)
    sp.set_defaults(func=cmd_poke)

    return p

def main(argv: Optional[List[str]] = None) -> int:
    ns = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return ns.func(ns)
    except (StreamEditError, OSError, ValueError, OverflowError, TypeError) as e:
        print(f"streamedit: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
