# csvtable/storage.py
import logging
import os
from pathlib import Path

from .errors import FileNotWritableError

logger = logging.getLogger(__name__)


class StorageManager:

    @staticmethod
    def save(file_path, content: bytes, lock: bool = True) -> int:
        """
        Escribe el contenido en disco y devuelve los bytes escritos.

        Con ``lock`` se toma un bloqueo exclusivo (advisory) antes de truncar
        el archivo, de modo que otro escritor cooperativo no lo vea a medias.
        """
        path = Path(file_path)
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT, 0o644)
            with os.fdopen(fd, 'wb') as f:
                if lock:
                    StorageManager._lock(f)
                f.truncate(0)
                written = f.write(content)
                f.flush()
        except OSError as e:
            raise FileNotWritableError(str(file_path), f'File "{file_path}" can not be written: {e}')

        logger.info(f"Saved {written} bytes to {path}")
        return written

    @staticmethod
    def _lock(f) -> None:
        # El bloqueo se libera al cerrar el descriptor
        if os.name == 'posix':
            import fcntl
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
        else:
            import msvcrt
            msvcrt.locking(f.fileno(), msvcrt.LK_LOCK, 1)
