# csvtable/loader.py
"""
Punto de entrada para leer archivos CSV del disco.
"""

import logging
from pathlib import Path
from typing import Tuple

from .encoding import EncodingResolver
from .errors import CsvFileNotFoundError, FileNotReadableError, WrongMimeTypeError
from .mime import MimeTypeDetector
from .models import ParserConfig, SourceInfo

logger = logging.getLogger(__name__)


class CsvLoader:
    """Valida y lee archivos CSV antes de entregarlos al parser."""

    @classmethod
    def validate(cls, file_path, config: ParserConfig) -> SourceInfo:
        """
        Comprueba que el archivo existe y que su tipo MIME está permitido.

        Solo se leen los primeros ``config.sniff_size`` bytes.

        Raises:
            CsvFileNotFoundError: si la ruta no es un archivo regular.
            WrongMimeTypeError: si el tipo MIME no está en la lista permitida.
            FileNotReadableError: si la cabecera no pudo leerse.
        """
        path = Path(file_path)
        try:
            # is_file() propaga PermissionError si el directorio no es accesible
            if not path.is_file():
                raise CsvFileNotFoundError(str(file_path))
            mime_type = MimeTypeDetector.detect(str(path), config.sniff_size)
            size = path.stat().st_size
        except OSError as e:
            raise FileNotReadableError(str(file_path), f'File "{file_path}" can not be read: {e}')

        if mime_type not in config.mime_types:
            logger.warning(f"Rejected {file_path}: mime type {mime_type} not in {list(config.mime_types)}")
            raise WrongMimeTypeError(str(file_path), mime_type)

        return SourceInfo(path=str(file_path), size=size, mime_type=mime_type)

    @classmethod
    def load(cls, file_path, config: ParserConfig) -> Tuple[str, SourceInfo]:
        """
        Lee un archivo CSV completo y lo decodifica.

        Args:
            file_path: Ruta al archivo
            config: Configuración (encoding de entrada, tipos MIME)

        Returns:
            Tupla (texto, SourceInfo)
        """
        source = cls.validate(file_path, config)

        try:
            raw_data = Path(file_path).read_bytes()
        except OSError as e:
            raise FileNotReadableError(str(file_path), f'File "{file_path}" can not be read: {e}')

        text, encoding = EncodingResolver.decode(raw_data, config.input_encoding)
        source.encoding = encoding
        source.size = len(raw_data)

        logger.info(f"Loaded {file_path}: {len(raw_data)} bytes, {source.mime_type}, {encoding}")
        return text, source
