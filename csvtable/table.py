# csvtable/table.py
"""
Modelo de tabla CSV.

Table guarda las filas en forma posicional (listas de strings del mismo
ancho). Con el modo cabecera activo cada fila se expone además como
diccionario ``nombre -> valor``, derivado de la cabecera en cada acceso.
"""

import logging
from collections.abc import Iterable, Mapping, MutableSequence
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .encoding import EncodingResolver
from .errors import InvalidArgumentError
from .headers import dedupe_header, extend_header, validate_header, zip_row
from .loader import CsvLoader
from .models import PAD_VALUE, ParserConfig, Record, SourceInfo
from .reader import LineConverter, StreamReader
from .reassembler import iter_records
from .storage import StorageManager
from .tokenizer import tokenize
from .writer import CsvWriter

logger = logging.getLogger(__name__)

SCALAR_TYPES = (str, int, float, bool)

Row = Union[Record, Dict[str, str]]


class Table(MutableSequence):
    """
    Tabla CSV: parseo, edición y serialización.

    Se comporta como una secuencia mutable de filas: admite ``len()``,
    iteración, acceso y asignación por índice, ``append`` e ``insert``.

    Example:
        >>> table = Table().parse('"a\\nb",c\\nd,e')
        >>> table.to_list()
        [['a\\nb', 'c'], ['d', 'e']]
    """

    def __init__(self, rows: Optional[Iterable] = None,
                 config: Optional[ParserConfig] = None, **options):
        """
        Args:
            rows: Datos iniciales (secuencia de filas)
            config: Configuración; por defecto se construye desde Settings
            **options: Campos de ParserConfig que sobrescriben la configuración
        """
        if config is None:
            config = ParserConfig.from_settings(**options)
        elif options:
            config = config.with_options(**options)

        self._config = config
        self._rows: List[Record] = []
        self._header: Optional[List[str]] = None
        self._width = 0
        self.source: Optional[SourceInfo] = None

        if rows is not None:
            if isinstance(rows, (str, bytes)) or not isinstance(rows, Iterable):
                raise InvalidArgumentError("Initial data must be a sequence of rows")
            records = [self._coerce_row(row, named=False) for row in rows]
            self._install(*self._build(records))

    # ------------------------------------------------------------------
    # Parseo
    # ------------------------------------------------------------------

    def parse(self, data: Union[str, bytes]) -> "Table":
        """
        Analiza texto CSV y reemplaza el contenido de la tabla.

        Args:
            data: Texto, o bytes en el encoding de entrada

        Returns:
            La propia tabla
        """
        if isinstance(data, (bytes, bytearray)):
            data, _ = EncodingResolver.decode(bytes(data), self._config.input_encoding)
        elif not isinstance(data, str):
            raise InvalidArgumentError(f"Cannot parse data of type {type(data).__name__}")

        config = self._config
        records = [
            tokenize(record, config.delimiter, config.enclosure)
            for record in iter_records(data, config.enclosure)
        ]

        # Se construye aparte y se intercambia: un error no deja la tabla a medias
        rows, header, width = self._build(records)
        self._install(rows, header, width)

        logger.debug(f"Parsed {len(records)} records, {width} columns")
        return self

    def parse_file(self, file_path) -> "Table":
        """
        Lee y analiza un archivo CSV completo.

        Raises:
            CsvFileNotFoundError, WrongMimeTypeError, FileNotReadableError,
            DecodingError
        """
        text, source = CsvLoader.load(file_path, self._config)
        self.parse(text)

        source.metadata = {'rows': len(self._rows), 'columns': self._width,
                           'has_headers': self._header is not None}
        self.source = source
        return self

    def iter_file(self, file_path, convert: Optional[LineConverter] = None) -> Iterator[Row]:
        """
        Recorre un archivo registro a registro sin modificar la tabla.

        Args:
            file_path: Ruta al archivo
            convert: Transformación ``(línea, config) -> línea`` por línea física
        """
        return StreamReader.iter_file(file_path, self._config, convert)

    # ------------------------------------------------------------------
    # Secuencia mutable
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self._view(row) for row in self._rows[index]]
        return self._view(self._rows[index])

    def __setitem__(self, index, row) -> None:
        if isinstance(index, slice):
            raise TypeError("Table does not support slice assignment")
        self.set_at(index, row)

    def __delitem__(self, index) -> None:
        del self._rows[index]

    def __iter__(self) -> Iterator[Row]:
        for row in self._rows:
            yield self._view(row)

    def __str__(self) -> str:
        return self.serialize() or ""

    def __repr__(self) -> str:
        return f"<Table rows={len(self._rows)} width={self._width} headers={self._header!r}>"

    def insert(self, index: int, row) -> None:
        record = self._coerce_row(row)
        if self._promote_to_header(record):
            return
        self._rows.insert(index, self._fit(record))

    def append(self, row) -> None:
        """
        Añade una fila al final.

        Si la fila es más ancha que la tabla, todas las filas existentes (y
        la cabecera) se amplían; si es más estrecha, se rellena.

        Raises:
            InvalidArgumentError: si la fila no es una secuencia plana de escalares.
        """
        self.insert(len(self._rows), row)

    def set_at(self, index: int, row) -> None:
        """
        Reemplaza la fila en ``index``; ``index == len(table)`` añade al final.

        Raises:
            InvalidArgumentError: si la fila no es válida.
            IndexError: si el índice está fuera de rango.
        """
        record = self._coerce_row(row)
        size = len(self._rows)

        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"Row index must be an integer, got {type(index).__name__}")
        if index == size:
            self.append(record)
            return
        if not -size <= index < size:
            raise IndexError(f"Row index {index} out of range (0..{size})")

        self._rows[index] = self._fit(record)

    def row(self, index: int) -> Record:
        """Fila en forma posicional, aunque haya cabecera."""
        return list(self._rows[index])

    def to_list(self) -> List[Record]:
        """Copia de todas las filas en forma posicional (sin cabecera)."""
        return [list(row) for row in self._rows]

    def records(self) -> List[Row]:
        """Copia de todas las filas; diccionarios si hay cabecera."""
        return list(self)

    # ------------------------------------------------------------------
    # Cabeceras
    # ------------------------------------------------------------------

    @property
    def headers(self) -> Optional[List[str]]:
        return list(self._header) if self._header is not None else None

    @property
    def headers_enabled(self) -> bool:
        return self._config.headers

    def enable_headers(self, flag: bool = True) -> "Table":
        """
        Activa o desactiva el modo cabecera.

        Al activarlo sin cabecera definida, la primera fila pasa a ser la
        cabecera. Al desactivarlo, la cabecera vuelve a ser la primera fila.
        """
        flag = bool(flag)
        rows = [list(row) for row in self._rows]
        header = self._header

        if flag and header is None and rows:
            header = extend_header(dedupe_header(rows.pop(0)), self._width)
        elif not flag and header is not None:
            rows.insert(0, list(header))
            header = None

        self._config = self._config.with_options(headers=flag)
        self._install(rows, header, self._width)
        return self

    def set_headers(self, names, delete_first_row: bool = False) -> "Table":
        """
        Define la cabecera y activa el modo cabecera.

        Args:
            names: Nombres únicos de columna
            delete_first_row: Elimina antes la primera fila (p. ej. cuando
                contiene la cabecera original)

        Raises:
            InvalidArgumentError: si los nombres no son válidos o están repetidos.
        """
        header = validate_header(names)
        rows = [list(row) for row in self._rows]

        if delete_first_row and rows:
            rows.pop(0)

        width = max(self._width, len(header))
        rows = [row + [PAD_VALUE] * (width - len(row)) for row in rows]

        self._config = self._config.with_options(headers=True)
        self._install(rows, extend_header(header, width), width)
        return self

    # ------------------------------------------------------------------
    # Serialización
    # ------------------------------------------------------------------

    def serialize(self) -> Optional[str]:
        """
        Convierte la tabla en texto CSV.

        Returns:
            Texto CSV (cabecera primero en modo cabecera), o None si la tabla está vacía
        """
        return CsvWriter(self._config).format(self._rows, self._header)

    def to_bytes(self) -> bytes:
        """Texto CSV codificado con el encoding de salida."""
        text = self.serialize() or ""
        encoding = EncodingResolver.normalize(self._config.output_encoding)
        try:
            return text.encode(encoding, errors='strict')
        except UnicodeEncodeError as e:
            logger.warning(f"Characters not representable in {encoding} were replaced: {e}")
            return text.encode(encoding, errors='replace')

    def save_to_file(self, file_path, lock: bool = True) -> int:
        """
        Guarda la tabla como CSV.

        Returns:
            Número de bytes escritos

        Raises:
            FileNotWritableError: si no se pudo escribir el archivo.
        """
        return StorageManager.save(file_path, self.to_bytes(), lock=lock)

    # ------------------------------------------------------------------
    # Configuración
    # ------------------------------------------------------------------

    @property
    def config(self) -> ParserConfig:
        return self._config

    @property
    def width(self) -> int:
        return self._width

    @property
    def delimiter(self) -> str:
        return self._config.delimiter

    @property
    def enclosure(self) -> str:
        return self._config.enclosure

    @property
    def input_encoding(self) -> str:
        return self._config.input_encoding

    @property
    def output_encoding(self) -> str:
        return self._config.output_encoding

    @property
    def mime_types(self) -> List[str]:
        return list(self._config.mime_types)

    @property
    def line_terminator(self) -> str:
        return self._config.line_terminator

    def set_delimiter(self, delimiter: str) -> "Table":
        self._config = self._config.with_options(delimiter=delimiter)
        return self

    def set_enclosure(self, enclosure: str) -> "Table":
        self._config = self._config.with_options(enclosure=enclosure)
        return self

    def set_input_encoding(self, encoding: str) -> "Table":
        self._config = self._config.with_options(input_encoding=encoding)
        return self

    def set_line_terminator(self, line_terminator: str) -> "Table":
        self._config = self._config.with_options(line_terminator=line_terminator)
        return self

    def add_mime_type(self, mime_type: str) -> "Table":
        self._config = self._config.with_mime_type(mime_type)
        return self

    def set_output_encoding(self, encoding: str) -> "Table":
        """
        Cambia el encoding de salida y recodifica los valores guardados.

        Los caracteres que el nuevo encoding no puede representar se
        sustituyen. No hace nada si el encoding no cambia.
        """
        config = self._config.with_options(output_encoding=encoding)
        if EncodingResolver.same(encoding, self._config.output_encoding):
            self._config = config
            return self

        codec = EncodingResolver.normalize(encoding)
        replaced = 0

        def convert(values: List[str]) -> List[str]:
            nonlocal replaced
            result = []
            for value in values:
                value, lossy = EncodingResolver.transcode(value, codec)
                replaced += lossy
                result.append(value)
            return result

        rows = [convert(row) for row in self._rows]
        header = dedupe_header(convert(self._header)) if self._header is not None else None

        if replaced:
            logger.warning(f"{replaced} values had characters not representable in {codec}")

        self._config = config
        self._install(rows, header, self._width)
        return self

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    def _view(self, row: Record) -> Row:
        if self._header is not None:
            return zip_row(self._header, row)
        return list(row)

    def _coerce_row(self, row, named: bool = True) -> Record:
        """Valida una fila y la convierte en lista de strings (sin modificar la tabla)."""
        if isinstance(row, Mapping):
            if not named or self._header is None:
                raise InvalidArgumentError("Named rows require headers to be set")
            unknown = [key for key in row if key not in self._header]
            if unknown:
                raise InvalidArgumentError(f"Unknown header names: {unknown}")
            row = [row.get(name) for name in self._header]

        if isinstance(row, (str, bytes, bytearray)) or not isinstance(row, Iterable):
            raise InvalidArgumentError(
                f"Row must be a one-dimensional sequence, got {type(row).__name__}"
            )

        record = []
        for index, value in enumerate(row):
            if value is None:
                record.append(PAD_VALUE)
            elif isinstance(value, SCALAR_TYPES):
                record.append(value if isinstance(value, str) else str(value))
            else:
                raise InvalidArgumentError(
                    f"Row is not one-dimensional: value at position {index} is {type(value).__name__}"
                )
        return record

    def _promote_to_header(self, record: Record) -> bool:
        # Modo cabecera sin cabecera definida: el primer registro es la cabecera
        if not self._config.headers or self._header is not None:
            return False
        width = max(self._width, len(record))
        self._widen(width)
        self._header = extend_header(dedupe_header(record), width)
        return True

    def _fit(self, record: Record) -> Record:
        """Armoniza el ancho de la fila con el de la tabla, en ambos sentidos."""
        if len(record) > self._width:
            self._widen(len(record))
        elif len(record) < self._width:
            record = record + [PAD_VALUE] * (self._width - len(record))
        return record

    def _widen(self, width: int) -> None:
        if width <= self._width:
            return
        for row in self._rows:
            row.extend([PAD_VALUE] * (width - len(row)))
        if self._header is not None:
            self._header = extend_header(self._header, width)
        self._width = width

    def _build(self, records: List[Record]) -> Tuple[List[Record], Optional[List[str]], int]:
        """Construye filas rellenadas (y cabecera en modo cabecera) a partir de registros."""
        width = max((len(record) for record in records), default=0)
        header = None

        if self._config.headers and records:
            header = extend_header(dedupe_header(records[0]), width)
            records = records[1:]

        rows = [record + [PAD_VALUE] * (width - len(record)) for record in records]
        return rows, header, width

    def _install(self, rows: List[Record], header: Optional[List[str]], width: int) -> None:
        self._rows = rows
        self._header = header
        self._width = width
