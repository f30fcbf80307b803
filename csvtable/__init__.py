# csvtable/__init__.py
"""
Parseo y serialización de CSV con campos multilínea, cabeceras y encodings.
"""

from .table import Table
from .models import ParserConfig, SourceInfo, DEFAULT_MIME_TYPES
from .reassembler import LineReassembler, iter_records, split_records
from .tokenizer import tokenize
from .writer import CsvWriter
from .errors import (
    CsvError,
    CsvFileError,
    CsvFileNotFoundError,
    FileNotReadableError,
    WrongMimeTypeError,
    FileNotWritableError,
    InvalidArgumentError,
    InvalidConfigurationError,
    DecodingError,
)

__all__ = [
    'Table',
    'ParserConfig',
    'SourceInfo',
    'DEFAULT_MIME_TYPES',
    'LineReassembler',
    'iter_records',
    'split_records',
    'tokenize',
    'CsvWriter',
    'CsvError',
    'CsvFileError',
    'CsvFileNotFoundError',
    'FileNotReadableError',
    'WrongMimeTypeError',
    'FileNotWritableError',
    'InvalidArgumentError',
    'InvalidConfigurationError',
    'DecodingError',
]
