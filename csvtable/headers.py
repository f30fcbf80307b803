# csvtable/headers.py
"""
Utilidades de cabecera: validación, nombres de relleno y vista por nombre.
"""

from typing import Dict, List, Sequence

from .errors import InvalidArgumentError
from .models import PAD_VALUE


def validate_header(names) -> List[str]:
    """
    Valida una lista de nombres de cabecera.

    Raises:
        InvalidArgumentError: si no es una secuencia plana de strings únicos.
    """
    if isinstance(names, (str, bytes)) or not isinstance(names, Sequence):
        raise InvalidArgumentError(f"Headers must be a sequence of names, got {type(names).__name__}")

    seen = set()
    header = []
    for index, name in enumerate(names):
        if not isinstance(name, str):
            raise InvalidArgumentError(f"Header name at position {index} is not a string: {name!r}")
        if name in seen:
            raise InvalidArgumentError(f"Duplicated header name: '{name}'")
        seen.add(name)
        header.append(name)

    return header


def dedupe_header(names: Sequence[str]) -> List[str]:
    """
    Cabecera tomada de los datos: los nombres repetidos se sustituyen por
    nombres de relleno en lugar de rechazar el archivo.
    """
    header = []
    taken = set()
    for index, name in enumerate(names):
        if name in taken:
            name = placeholder_name(index, taken | set(names))
        taken.add(name)
        header.append(name)
    return header


def placeholder_name(index: int, taken) -> str:
    """Nombre para una columna sin cabecera: su índice, con '_' hasta que sea único."""
    name = str(index)
    while name in taken:
        name = f"_{name}"
    return name


def extend_header(header: List[str], width: int) -> List[str]:
    """Devuelve la cabecera ampliada hasta ``width`` columnas con nombres de relleno."""
    extended = list(header)
    taken = set(extended)
    for index in range(len(extended), width):
        name = placeholder_name(index, taken)
        taken.add(name)
        extended.append(name)
    return extended


def zip_row(header: Sequence[str], row: Sequence[str]) -> Dict[str, str]:
    """
    Vista por nombre de una fila.

    Las columnas que faltan en la fila valen PAD_VALUE; los valores sin
    cabecera reciben un nombre de relleno.
    """
    if len(row) > len(header):
        header = extend_header(list(header), len(row))
    values = list(row) + [PAD_VALUE] * (len(header) - len(row))
    return dict(zip(header, values))
