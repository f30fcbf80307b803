# csvtable/encoding.py
"""
Resolución de codificación de datos CSV.
"""

import codecs
import logging
from typing import Optional, Tuple

import chardet

from .errors import DecodingError, InvalidConfigurationError

logger = logging.getLogger(__name__)

AUTO = "auto"

# BOM -> codec que lo consume al decodificar
BOM_MAP = [
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
]


class EncodingResolver:
    """Detecta, valida y aplica codificaciones de texto."""

    # Orden de prioridad cuando chardet no es concluyente
    ENCODING_PRIORITY = ['utf-8', 'cp1252', 'latin-1']

    CONFIDENCE_THRESHOLD = 0.7

    @staticmethod
    def normalize(encoding: str, option: str = "encoding") -> str:
        """
        Devuelve el nombre canónico de Python para un encoding.

        Raises:
            InvalidConfigurationError: si el codec no existe.
        """
        if not isinstance(encoding, str) or not encoding.strip():
            raise InvalidConfigurationError(option, encoding, "encoding name must be a non-empty string")
        try:
            return codecs.lookup(encoding.strip()).name
        except LookupError:
            raise InvalidConfigurationError(option, encoding, "unknown encoding")

    @classmethod
    def same(cls, first: str, second: str) -> bool:
        """Indica si dos nombres de encoding designan el mismo codec."""
        return cls.normalize(first) == cls.normalize(second)

    @staticmethod
    def is_auto(encoding: Optional[str]) -> bool:
        return encoding is None or encoding.strip().lower() == AUTO

    @staticmethod
    def detect_bom(raw_data: bytes) -> Optional[str]:
        """Devuelve el codec indicado por el BOM, si existe."""
        for bom, encoding in BOM_MAP:
            if raw_data.startswith(bom):
                return encoding
        return None

    @classmethod
    def detect(cls, raw_data: bytes) -> str:
        """
        Detecta la codificación de un bloque de bytes.

        Args:
            raw_data: Contenido (o muestra) a analizar

        Returns:
            Nombre del codec a usar para decodificar
        """
        bom_encoding = cls.detect_bom(raw_data)
        if bom_encoding:
            return bom_encoding

        if not raw_data:
            return 'utf-8'

        result = chardet.detect(raw_data)
        detected_encoding = (result.get('encoding') or '').lower()
        confidence = result.get('confidence') or 0

        # Si chardet tiene alta confianza, usar esa
        if confidence > cls.CONFIDENCE_THRESHOLD and detected_encoding:
            encoding_map = {
                'ascii': 'utf-8',
                'windows-1252': 'cp1252',
                'iso-8859-1': 'latin-1'
            }
            normalized = encoding_map.get(detected_encoding, detected_encoding)
            if cls._decodes(raw_data, normalized):
                logger.debug(f"Encoding detected by chardet: {normalized} ({confidence:.2f})")
                return normalized

        # Fallback: intentar cada codificación en orden de prioridad
        for encoding in cls.ENCODING_PRIORITY:
            if cls._decodes(raw_data, encoding):
                return encoding

        # latin-1 decodifica cualquier secuencia de bytes
        return 'latin-1'

    @classmethod
    def resolve(cls, raw_data: bytes, encoding: Optional[str]) -> str:
        """Resuelve el encoding efectivo: el configurado, o el detectado si es 'auto'."""
        if cls.is_auto(encoding):
            return cls.detect(raw_data)
        return encoding

    @classmethod
    def decode(cls, raw_data: bytes, encoding: Optional[str]) -> Tuple[str, str]:
        """
        Decodifica bytes a texto eliminando el BOM correspondiente.

        Returns:
            Tupla (texto, encoding usado)

        Raises:
            DecodingError: si los bytes no son válidos para el encoding.
        """
        encoding = cls.resolve(raw_data, encoding)
        try:
            text = raw_data.decode(cls.normalize(encoding), errors='strict')
        except UnicodeDecodeError as e:
            raise DecodingError(encoding, str(e))
        return cls.strip_bom(text), encoding

    @classmethod
    def incremental_decoder(cls, encoding: str):
        """Crea un decodificador incremental para lectura por bloques."""
        return codecs.getincrementaldecoder(cls.normalize(encoding))(errors='strict')

    @staticmethod
    def strip_bom(text: str) -> str:
        return text[1:] if text.startswith('\ufeff') else text

    @staticmethod
    def transcode(value: str, encoding: str) -> Tuple[str, bool]:
        """
        Pasa un valor por el codec indicado.

        Los caracteres que el codec no puede representar se sustituyen.

        Returns:
            Tupla (valor, hubo_sustitución)
        """
        encoded = value.encode(encoding, errors='replace')
        result = encoded.decode(encoding, errors='replace')
        return result, result != value

    @staticmethod
    def _decodes(raw_data: bytes, encoding: str) -> bool:
        # final=False: la muestra puede cortar un carácter multibyte al final
        try:
            codecs.getincrementaldecoder(encoding)(errors='strict').decode(raw_data, final=False)
            return True
        except (UnicodeDecodeError, LookupError):
            return False
