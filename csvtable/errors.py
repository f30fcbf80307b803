# csvtable/errors.py
"""
Excepciones de csvtable.

Todas heredan de CsvError. Los errores de archivo conservan la ruta
que los provocó en el atributo ``path``.
"""

from typing import Optional


class CsvError(Exception):
    """Error base de la librería."""
    pass


class CsvFileError(CsvError):
    """Error base para operaciones sobre archivos."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = str(path)
        super().__init__(message or f"File error: {self.path}")


class CsvFileNotFoundError(CsvFileError):
    """La ruta no apunta a un archivo regular existente."""

    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(path, message or f'File "{path}" could not be found.')


class FileNotReadableError(CsvFileError):
    """El archivo existe pero no pudo leerse."""

    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(path, message or f'File "{path}" can not be read.')


class WrongMimeTypeError(CsvFileError):
    """El tipo MIME detectado no está en la lista permitida."""

    def __init__(self, path: str, mime_type: Optional[str] = None, message: Optional[str] = None):
        self.mime_type = mime_type
        context = f" ({mime_type})" if mime_type else ""
        super().__init__(path, message or f'Wrong file "{path}" mime-type{context}.')


class FileNotWritableError(CsvFileError):
    """No se pudo escribir el archivo de salida."""

    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(path, message or f'File "{path}" can not be written.')


class InvalidArgumentError(CsvError):
    """Una fila o lista de cabeceras no es una secuencia plana de escalares."""
    pass


class InvalidConfigurationError(CsvError):
    """Valor de configuración inválido (delimitador, encoding, etc.)."""

    def __init__(self, option: str, value, reason: str):
        self.option = option
        self.value = value
        super().__init__(f"Invalid configuration for '{option}' ({value!r}): {reason}")


class DecodingError(CsvError):
    """Los bytes de entrada no se pueden decodificar con el encoding indicado."""

    def __init__(self, encoding: str, details: str = ""):
        self.encoding = encoding
        context = f": {details}" if details else ""
        super().__init__(f"Could not decode input as {encoding}{context}")
