"""Best-score persistence.

The session reads the store once at startup and writes it only when a round
beats the record. Stores raise BestScoreStoreError on I/O or format problems;
the session logs it and keeps the in-memory value.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class BestScoreStoreError(Exception):
    """Raised when the best score cannot be read or written."""


# Store failures the helpers log instead of raising
STORE_ERRORS = (BestScoreStoreError, OSError, ValueError, TypeError)


class BestScoreStore(Protocol):
    def load(self) -> int:
        ...

    def save(self, value: int) -> None:
        ...


class MemoryBestScoreStore:
    """Keeps the record in memory only. Counts writes for inspection."""

    def __init__(self, value: int = 0) -> None:
        self.value = max(0, int(value))
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = int(value)
        self.saves += 1


class JsonBestScoreStore:
    """Stores ``{"best_score": N}`` in a small JSON file.

    A missing file means no record yet. Writes go to a temp file first and
    are swapped in with ``os.replace``.
    """

    KEY = "best_score"

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> int:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return 0
        except OSError as e:
            raise BestScoreStoreError(f"Failed to read {self.path}: {e}") from e

        try:
            data = json.loads(text)
        except ValueError as e:
            raise BestScoreStoreError(f"{self.path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise BestScoreStoreError(f"{self.path} does not hold a JSON object")
        value = data.get(self.KEY, 0)
        if isinstance(value, bool) or not isinstance(value, int):
            raise BestScoreStoreError(f"{self.KEY} in {self.path} must be an integer")
        return max(0, value)

    def save(self, value: int) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps({self.KEY: int(value)}), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            try:
                if tmp.exists():
                    tmp.unlink()
            except OSError:
                logger.debug(f"Could not remove {tmp}")
            raise BestScoreStoreError(f"Failed to save best score to {self.path}: {e}") from e
        logger.debug(f"Best score {value} saved to {self.path}")


def load_best_score(store: Optional[BestScoreStore]) -> int:
    """Read the record, falling back to 0 when the store is missing or broken."""
    if store is None:
        return 0
    try:
        return max(0, int(store.load()))
    except STORE_ERRORS as e:
        logger.warning(f"Best score unavailable, starting from 0: {e}")
        return 0


def save_best_score(store: Optional[BestScoreStore], value: int) -> bool:
    """Write a new record. Returns False if the store refused it."""
    if store is None:
        return False
    try:
        store.save(value)
        return True
    except STORE_ERRORS as e:
        logger.warning(f"Best score {value} kept in memory only: {e}")
        return False
