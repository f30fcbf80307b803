# csvtable/models.py
"""
Modelos de datos internos de csvtable.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Dict, List, Optional, Tuple

from .config import Settings, get_settings
from .encoding import EncodingResolver
from .errors import InvalidConfigurationError

Record = List[str]

DEFAULT_MIME_TYPES = (
    "text/plain",
    "text/csv",
    "text/tsv",
    "application/vnd.ms-excel",
)

# Separadores de registro aceptados en la salida
LINE_TERMINATORS = ("\n", "\r\n", "\r")

# Relleno de celdas al armonizar el ancho de las filas
PAD_VALUE = ""


@dataclass(frozen=True)
class ParserConfig:
    """Configuración del parser (dialecto, encodings y tipos MIME)."""
    delimiter: str = ","
    enclosure: str = '"'
    input_encoding: str = "UTF-8"
    output_encoding: str = "UTF-8"
    headers: bool = False
    mime_types: Tuple[str, ...] = DEFAULT_MIME_TYPES
    line_terminator: str = "\n"
    chunk_size: int = 8192
    sniff_size: int = 4096

    def __post_init__(self):
        self._validate_char("delimiter", self.delimiter)
        self._validate_char("enclosure", self.enclosure)
        # Una línea de solo espacios se descarta al leer: el enclosure no puede serlo
        if self.enclosure.isspace():
            raise InvalidConfigurationError(
                "enclosure", self.enclosure, "enclosure must not be whitespace"
            )
        if self.delimiter == self.enclosure:
            raise InvalidConfigurationError(
                "enclosure", self.enclosure, "enclosure must differ from the delimiter"
            )

        if not EncodingResolver.is_auto(self.input_encoding):
            EncodingResolver.normalize(self.input_encoding, "input_encoding")
        EncodingResolver.normalize(self.output_encoding, "output_encoding")

        if self.line_terminator not in LINE_TERMINATORS:
            raise InvalidConfigurationError(
                "line_terminator", self.line_terminator, "expected one of LF, CRLF or CR"
            )

        for name in ("chunk_size", "sniff_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidConfigurationError(name, value, "must be a positive integer")

        if isinstance(self.mime_types, str):
            raise InvalidConfigurationError("mime_types", self.mime_types, "expected a sequence of mime types")
        mime_types = tuple(self.mime_types)
        for mime_type in mime_types:
            if not isinstance(mime_type, str) or "/" not in mime_type:
                raise InvalidConfigurationError("mime_types", mime_type, "not a mime type")
        # frozen: se normaliza a tupla sin pasar por __setattr__
        object.__setattr__(self, "mime_types", mime_types)
        object.__setattr__(self, "headers", bool(self.headers))

    @staticmethod
    def _validate_char(option: str, value) -> None:
        if not isinstance(value, str) or len(value) != 1:
            raise InvalidConfigurationError(option, value, "must be exactly one character")
        if value in "\r\n":
            raise InvalidConfigurationError(option, value, "line terminators are not allowed")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **overrides) -> "ParserConfig":
        """
        Construye la configuración a partir de Settings (variables de entorno / .env).

        Args:
            settings: Settings a usar; por defecto get_settings()
            **overrides: Valores explícitos que tienen prioridad
        """
        settings = settings or get_settings()
        values = {
            "delimiter": settings.CSV_DELIMITER,
            "enclosure": settings.CSV_ENCLOSURE,
            "input_encoding": settings.CSV_INPUT_ENCODING,
            "output_encoding": settings.CSV_OUTPUT_ENCODING,
            "headers": settings.CSV_HEADERS,
            "mime_types": tuple(settings.CSV_MIME_TYPES),
            "line_terminator": settings.CSV_LINE_TERMINATOR,
            "chunk_size": settings.CSV_CHUNK_SIZE,
            "sniff_size": settings.CSV_SNIFF_SIZE,
        }
        cls._check_options(overrides)
        values.update(overrides)
        return cls(**values)

    def with_options(self, **changes) -> "ParserConfig":
        """Copia validada de la configuración con los cambios indicados."""
        self._check_options(changes)
        return replace(self, **changes)

    def with_mime_type(self, mime_type: str) -> "ParserConfig":
        if mime_type in self.mime_types:
            return self
        return self.with_options(mime_types=self.mime_types + (mime_type,))

    @classmethod
    def _check_options(cls, options: Dict) -> None:
        known = {f.name for f in fields(cls)}
        for name in options:
            if name not in known:
                raise InvalidConfigurationError(name, options[name], "unknown option")


@dataclass
class SourceInfo:
    """Información del último archivo analizado."""
    path: str
    size: int = 0
    mime_type: Optional[str] = None
    encoding: Optional[str] = None
    metadata: Dict[str, object] = field(default_factory=dict)
