# csvtable/writer.py
"""
Serialización de filas a texto CSV.
"""

from typing import Iterable, List, Optional, Sequence

from .models import ParserConfig

SPECIAL_LINE_CHARS = ("\r", "\n")


class CsvWriter:
    """Convierte filas en texto CSV con el dialecto de un ParserConfig."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()

    def format_field(self, value: Optional[str]) -> str:
        """
        Escapa un campo.

        El enclosure se duplica y el campo se entrecomilla si contiene el
        enclosure, el delimitador o un salto de línea.
        """
        if value is None:
            return ""

        enclosure = self.config.enclosure
        needs_enclosure = (
            enclosure in value
            or self.config.delimiter in value
            or any(char in value for char in SPECIAL_LINE_CHARS)
        )

        if enclosure in value:
            value = value.replace(enclosure, enclosure + enclosure)

        if needs_enclosure:
            return f"{enclosure}{value}{enclosure}"
        return value

    def format_row(self, row: Sequence[Optional[str]]) -> str:
        cells = [self.format_field(value) for value in row]
        line = self.config.delimiter.join(cells)

        # Una línea en blanco se descartaría al volver a leerla
        if cells and not line.strip():
            enclosure = self.config.enclosure
            cells[0] = f"{enclosure}{cells[0]}{enclosure}"
            line = self.config.delimiter.join(cells)

        return line

    def format(self, rows: Iterable[Sequence[Optional[str]]],
               header: Optional[Sequence[str]] = None) -> Optional[str]:
        """
        Formatea cabecera y filas a CSV.

        Args:
            rows: Filas posicionales
            header: Cabecera a escribir primero (modo cabecera)

        Returns:
            Texto CSV, o None si no hay nada que escribir
        """
        lines: List[str] = []

        if header is not None:
            lines.append(self.format_row(header))

        for row in rows:
            lines.append(self.format_row(row))

        if not lines:
            return None

        return self.config.line_terminator.join(lines)
