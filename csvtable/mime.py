# csvtable/mime.py
"""
Detección del tipo MIME de un archivo por su contenido.
"""

import logging
from pathlib import Path

import chardet

from .encoding import EncodingResolver

logger = logging.getLogger(__name__)

TEXT_PLAIN = "text/plain"
OCTET_STREAM = "application/octet-stream"

MAGIC_NUMBERS = [
    (b'%PDF-', 'application/pdf'),
    (b'PK\x03\x04', 'application/zip'),
    (b'\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1', 'application/x-ole-storage'),
    (b'\x89PNG\r\n\x1a\n', 'image/png'),
    (b'\xff\xd8\xff', 'image/jpeg'),
    (b'GIF87a', 'image/gif'),
    (b'GIF89a', 'image/gif'),
    (b'\x1f\x8b', 'application/gzip'),
]


class MimeTypeDetector:
    """Detecta el tipo MIME leyendo solo la cabecera del archivo."""

    @classmethod
    def detect(cls, file_path: str, sniff_size: int = 4096) -> str:
        """
        Detecta el tipo MIME de un archivo.

        Args:
            file_path: Ruta al archivo
            sniff_size: Bytes a inspeccionar

        Returns:
            Tipo MIME detectado
        """
        with open(file_path, 'rb') as f:
            header = f.read(sniff_size)

        mime_type = cls.detect_bytes(header)
        logger.debug(f"Mime type of {Path(file_path).name}: {mime_type}")
        return mime_type

    @classmethod
    def detect_bytes(cls, header: bytes) -> str:
        # Un archivo vacío es texto vacío
        if not header:
            return TEXT_PLAIN

        for magic, mime_type in MAGIC_NUMBERS:
            if header.startswith(magic):
                return mime_type

        # UTF-16/32 contienen NUL, el BOM los identifica como texto
        if EncodingResolver.detect_bom(header):
            return TEXT_PLAIN

        if b'\x00' in header:
            return OCTET_STREAM

        if cls._looks_like_text(header):
            return TEXT_PLAIN

        return OCTET_STREAM

    @staticmethod
    def _looks_like_text(header: bytes) -> bool:
        if chardet.detect(header).get('encoding') is None:
            return False

        # Caracteres de control distintos de tab/CR/LF/FF indican binario
        control = sum(1 for byte in header if byte < 0x20 and byte not in (0x09, 0x0a, 0x0c, 0x0d))
        return control <= len(header) * 0.05
