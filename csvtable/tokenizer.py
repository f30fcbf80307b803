# csvtable/tokenizer.py
"""
División de un registro lógico en campos.

Reglas (RFC 4180, en modo permisivo):
- Los campos se separan por el delimitador salvo dentro de un campo entrecomillado.
- Un campo entrecomillado empieza por el enclosure; dentro de él dos enclosure
  seguidos representan uno literal y uno solo cierra el campo.
- Lo que aparece tras el cierre y antes del siguiente delimitador se añade tal cual.
- Los campos sin comillas son literales, incluido cualquier enclosure intermedio.
"""

from typing import List

# Estados del autómata
FIELD_START = 0
UNQUOTED = 1
QUOTED = 2
QUOTE_IN_QUOTED = 3


def tokenize(record: str, delimiter: str = ",", enclosure: str = '"') -> List[str]:
    """
    Divide un registro en sus campos.

    Args:
        record: Registro lógico (puede contener saltos de línea entrecomillados)
        delimiter: Separador de campos (un carácter)
        enclosure: Carácter de entrecomillado (un carácter)

    Returns:
        Lista de campos; siempre tantos como segmentos separados por el delimitador

    Example:
        >>> tokenize('1,"a ""b"", c",')
        ['1', 'a "b", c', '']
    """
    fields: List[str] = []
    current: List[str] = []
    state = FIELD_START

    for char in record:
        if state == QUOTED:
            if char == enclosure:
                state = QUOTE_IN_QUOTED
            else:
                current.append(char)

        elif state == QUOTE_IN_QUOTED:
            if char == enclosure:
                # Enclosure duplicado: literal, el campo sigue abierto
                current.append(char)
                state = QUOTED
            elif char == delimiter:
                fields.append("".join(current))
                current = []
                state = FIELD_START
            else:
                # Texto tras el cierre: se conserva literal
                current.append(char)
                state = UNQUOTED

        elif char == delimiter:
            fields.append("".join(current))
            current = []
            state = FIELD_START

        elif state == FIELD_START and char == enclosure:
            state = QUOTED

        else:
            current.append(char)
            state = UNQUOTED

    # Un campo sin cerrar al final se queda con el resto del registro
    fields.append("".join(current))
    return fields
