# csvtable/cli.py
"""
Línea de comandos: lee un CSV y lo vuelve a escribir con otro dialecto o encoding.

Uso:
    python -m csvtable entrada.csv salida.csv --delimiter ';' --input-encoding cp1251
    python -m csvtable entrada.csv --out-delimiter '\\t'      # a stdout
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import get_settings
from .encoding import EncodingResolver
from .errors import CsvError
from .table import Table

logger = logging.getLogger(__name__)

LINE_TERMINATOR_NAMES = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}


def _char(value: str) -> str:
    # Permite escribir el tabulador como '\t' en la shell
    return "\t" if value == "\\t" else value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csvtable",
        description="Parse a CSV file and write it back as normalized CSV.",
    )
    parser.add_argument("source", help="CSV file to read")
    parser.add_argument("dest", nargs="?", help="Output file (default: stdout)")
    parser.add_argument("--delimiter", type=_char, help="Input field delimiter")
    parser.add_argument("--enclosure", help="Input enclosure character")
    parser.add_argument("--input-encoding", help="Input encoding, or 'auto' to detect it")
    parser.add_argument("--output-encoding", help="Output encoding")
    parser.add_argument("--out-delimiter", type=_char, help="Output field delimiter")
    parser.add_argument("--line-terminator", choices=sorted(LINE_TERMINATOR_NAMES),
                        help="Output record separator")
    parser.add_argument("--headers", action="store_true", help="Treat the first record as header")
    parser.add_argument("--mime-type", action="append", default=[],
                        help="Extra accepted mime type (repeatable)")
    return parser


def run(args: argparse.Namespace) -> int:
    options = {
        "delimiter": args.delimiter,
        "enclosure": args.enclosure,
        "input_encoding": args.input_encoding,
        "output_encoding": args.output_encoding,
    }
    options = {name: value for name, value in options.items() if value is not None}
    if args.headers:
        options["headers"] = True

    try:
        table = Table(**options)
        for mime_type in args.mime_type:
            table.add_mime_type(mime_type)

        table.parse_file(args.source)

        if args.out_delimiter:
            table.set_delimiter(args.out_delimiter)
        if args.line_terminator:
            table.set_line_terminator(LINE_TERMINATOR_NAMES[args.line_terminator])

        if args.dest:
            written = table.save_to_file(args.dest)
            logger.info(f"{len(table)} rows, {written} bytes written to {args.dest}")
        elif len(table) or table.headers:
            # Bytes en el encoding de salida, no en el de la terminal
            terminator = table.line_terminator.encode(
                EncodingResolver.normalize(table.output_encoding)
            )
            sys.stdout.flush()
            sys.stdout.buffer.write(table.to_bytes() + terminator)
            sys.stdout.buffer.flush()
    except CsvError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return run(build_parser().parse_args(argv))
