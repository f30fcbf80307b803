# csvtable/config.py
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    CSV_DELIMITER: str = ","
    CSV_ENCLOSURE: str = '"'
    CSV_INPUT_ENCODING: str = "UTF-8"
    CSV_OUTPUT_ENCODING: str = "UTF-8"
    CSV_HEADERS: bool = False
    CSV_MIME_TYPES: List[str] = [
        "text/plain",
        "text/csv",
        "text/tsv",
        "application/vnd.ms-excel",
    ]
    CSV_LINE_TERMINATOR: str = "\n"

    CSV_CHUNK_SIZE: int = 8192  # bytes por lectura en iter_file
    CSV_SNIFF_SIZE: int = 4096  # bytes inspeccionados para el tipo MIME

    LOG_LEVEL: str = "WARNING"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """
    Crea una instancia única de Settings que se reutiliza.
    El decorador lru_cache asegura que solo se cree una vez.
    """
    return Settings()
