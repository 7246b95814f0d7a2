import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator, Union

from filelock import FileLock, Timeout
from loguru import logger


class LockTimeoutError(TimeoutError):
    """Die Sperre konnte innerhalb der Wartezeit nicht erlangt werden."""


# Eine Sperre pro Pfad innerhalb des Prozesses; zwischen Prozessen sperrt die Lock-Datei
_locks: Dict[str, threading.Lock] = {}
_meta_lock = threading.Lock()


def _get_lock(name: str) -> threading.Lock:
    with _meta_lock:
        if name not in _locks:
            _locks[name] = threading.Lock()
        return _locks[name]


def lock_file_path(path: Union[str, Path]) -> str:
    return f"{path}.lock"


@contextmanager
def workbook_lock(path: Union[str, Path], timeout: float) -> Generator[None, None, None]:
    """
    Context-Manager für die Sperre einer Arbeitszeit-Mappe.
    Sperrt zuerst innerhalb des Prozesses, dann über die Datei <path>.lock gegen andere
    Prozesse (CLI, Weboberfläche). Wartet insgesamt höchstens timeout Sekunden; die Sperre
    wird auf jedem Weg aus dem Block freigegeben.

    Args:
        path (str | Path): Pfad der Arbeitszeit-Mappe, das Verzeichnis muss existieren.
        timeout (float): Maximale Wartezeit in Sekunden.

    Raises:
        LockTimeoutError: Wenn die Sperre nicht rechtzeitig frei wird.

    Beispiel:
        with workbook_lock(config.workbook_path, timeout=10):
            do_something()
    """
    name = str(path)
    deadline = time.monotonic() + timeout
    thread_lock = _get_lock(name)
    logger.debug(f"Warte auf Sperre '{name}' (max. {timeout}s).")
    if not thread_lock.acquire(timeout=timeout):
        logger.error(f"Sperre '{name}' nicht erhalten nach {timeout}s.")
        raise LockTimeoutError(f"Sperre '{name}' nicht erhalten nach {timeout}s.")
    try:
        file_lock = FileLock(lock_file_path(name))
        try:
            file_lock.acquire(timeout=max(deadline - time.monotonic(), 0))
        except Timeout as exc:
            logger.error(f"Sperre '{name}' wird von einem anderen Prozess gehalten ({timeout}s gewartet).")
            raise LockTimeoutError(f"Sperre '{name}' nicht erhalten nach {timeout}s.") from exc
        try:
            yield
        finally:
            file_lock.release()
    finally:
        thread_lock.release()
        logger.debug(f"Sperre '{name}' freigegeben.")
