# csvtable/reassembler.py
"""
Reconstrucción de registros lógicos a partir de líneas físicas.

Un campo entrecomillado puede contener saltos de línea; al partir el texto
por líneas ese campo queda repartido en varias. Contando los caracteres de
cierre (enclosure) acumulados se sabe si el registro sigue abierto: una
cuenta impar indica un campo entrecomillado sin cerrar.

Todos los separadores de línea (CRLF, LFCR, CR, LF) se normalizan a LF,
que es el separador interno de registros y el que queda dentro de los
campos multilínea.
"""

import logging
import re
from typing import Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)

RECORD_SEPARATOR = "\n"

LINE_BREAK_RE = re.compile(r"\r\n|\n\r|\r|\n")


def split_physical_lines(text: str) -> List[str]:
    """Parte el texto en líneas físicas con cualquiera de los separadores soportados."""
    return LINE_BREAK_RE.split(text)


class LineReassembler:
    """
    Máquina de estados que une líneas físicas en registros lógicos.

    Cada línea se entrega con feed(); cuando el registro acumulado está
    completo (cuenta de enclosure par) se devuelve. Al final de la entrada
    se llama a flush() para recuperar lo pendiente.
    """

    def __init__(self, enclosure: str = '"'):
        self.enclosure = enclosure
        self._parts: List[str] = []
        self._count = 0
        self.records_emitted = 0
        self.lines_consumed = 0

    @property
    def pending(self) -> bool:
        """True si hay un campo entrecomillado abierto."""
        return self._count % 2 == 1

    def feed(self, line: str) -> Optional[str]:
        """
        Añade una línea física.

        Args:
            line: Línea sin separador final

        Returns:
            El registro lógico completo, o None si sigue abierto o está vacío
        """
        self.lines_consumed += 1
        self._parts.append(line)
        # Cuenta incremental: no se vuelve a recorrer lo ya acumulado
        self._count += line.count(self.enclosure)

        if self.pending:
            return None

        return self._take()

    def flush(self) -> Optional[str]:
        """
        Devuelve el registro pendiente al final de la entrada.

        Un campo sin cerrar se emite tal cual como último registro.
        """
        if not self._parts:
            return None

        if self.pending:
            logger.warning(
                f"Unterminated enclosed field at end of input "
                f"(record starting at line {self.lines_consumed - len(self._parts) + 1}); "
                f"emitting it as the last record"
            )

        return self._take()

    def reset(self) -> None:
        self._parts = []
        self._count = 0

    def _take(self) -> Optional[str]:
        record = RECORD_SEPARATOR.join(self._parts)
        self.reset()

        # Las líneas en blanco no generan registro
        if not record.strip():
            return None

        self.records_emitted += 1
        return record


def reassemble(lines: Iterable[str], enclosure: str = '"') -> Iterator[str]:
    """Genera registros lógicos a partir de un iterable de líneas físicas."""
    reassembler = LineReassembler(enclosure)

    for line in lines:
        record = reassembler.feed(line)
        if record is not None:
            yield record

    record = reassembler.flush()
    if record is not None:
        yield record


def iter_records(text: str, enclosure: str = '"') -> Iterator[str]:
    """Versión perezosa: registros lógicos de un texto completo."""
    return reassemble(split_physical_lines(text), enclosure)


def split_records(text: str, enclosure: str = '"') -> List[str]:
    """Versión inmediata de iter_records."""
    return list(iter_records(text, enclosure))
