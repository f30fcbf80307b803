# csvtable/reader.py
"""
Lectura de CSV en streaming, registro a registro.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from .encoding import EncodingResolver
from .errors import DecodingError, FileNotReadableError
from .headers import dedupe_header, zip_row
from .loader import CsvLoader
from .models import ParserConfig, Record
from .reassembler import LINE_BREAK_RE, LineReassembler
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

LineConverter = Callable[[str, ParserConfig], str]


def split_complete_lines(buffer: str, final: bool) -> Tuple[List[str], str]:
    """
    Separa del buffer las líneas físicas completas.

    Un separador al final del buffer puede ser la mitad de un CRLF/LFCR que
    llega en el siguiente bloque, así que esa última línea se retiene.

    Returns:
        Tupla (líneas completas, resto pendiente)
    """
    lines = []
    start = 0

    for match in LINE_BREAK_RE.finditer(buffer):
        if not final and match.end() == len(buffer):
            break
        lines.append(buffer[start:match.start()])
        start = match.end()

    rest = buffer[start:]
    if final:
        lines.append(rest)
        rest = ""

    return lines, rest


class StreamReader:
    """Genera registros de un archivo sin cargarlo entero en memoria."""

    @classmethod
    def iter_file(cls, file_path, config: ParserConfig,
                  convert: Optional[LineConverter] = None) -> Iterator[Union[Record, Dict[str, str]]]:
        """
        Recorre un archivo CSV registro a registro.

        La validación (existencia y tipo MIME) se hace en la llamada; la
        lectura empieza con la primera iteración.

        Args:
            file_path: Ruta al archivo
            config: Configuración del parser
            convert: Transformación opcional ``(línea, config) -> línea``
                aplicada a cada línea física antes de contar enclosures

        Returns:
            Iterador de registros (listas), o de diccionarios en modo cabecera
        """
        CsvLoader.validate(file_path, config)
        return cls._records(str(file_path), config, convert)

    @classmethod
    def _records(cls, file_path: str, config: ParserConfig,
                 convert: Optional[LineConverter]) -> Iterator[Union[Record, Dict[str, str]]]:
        reassembler = LineReassembler(config.enclosure)
        header: Optional[List[str]] = None
        emitted = 0

        for line in cls._physical_lines(file_path, config):
            if convert is not None:
                line = convert(line, config)

            record = reassembler.feed(line)
            if record is None:
                continue

            fields = tokenize(record, config.delimiter, config.enclosure)
            if config.headers and header is None:
                header = dedupe_header(fields)
                continue

            emitted += 1
            yield zip_row(header, fields) if header is not None else fields

        record = reassembler.flush()
        if record is not None:
            fields = tokenize(record, config.delimiter, config.enclosure)
            if config.headers and header is None:
                header = dedupe_header(fields)
            else:
                emitted += 1
                yield zip_row(header, fields) if header is not None else fields

        logger.info(f"Streamed {emitted} records from {Path(file_path).name}")

    @staticmethod
    def _physical_lines(file_path: str, config: ParserConfig) -> Iterator[str]:
        try:
            with open(file_path, 'rb') as f:
                chunk = f.read(config.chunk_size)
                encoding = EncodingResolver.resolve(chunk, config.input_encoding)
                decoder = EncodingResolver.incremental_decoder(encoding)
                buffer = ""
                bom_checked = False

                while True:
                    final = not chunk
                    try:
                        buffer += decoder.decode(chunk, final=final)
                    except UnicodeDecodeError as e:
                        raise DecodingError(encoding, str(e))

                    if not bom_checked and buffer:
                        buffer = EncodingResolver.strip_bom(buffer)
                        bom_checked = True

                    lines, buffer = split_complete_lines(buffer, final)
                    yield from lines

                    if final:
                        break
                    chunk = f.read(config.chunk_size)
        except OSError as e:
            raise FileNotReadableError(file_path, f'File "{file_path}" can not be read: {e}')
