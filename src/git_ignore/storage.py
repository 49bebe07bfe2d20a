"""Load/save backends for the persisted stores.

Both :class:`~git_ignore.cache.CacheStore` and
:class:`~git_ignore.user_data.UserConfig` talk to a :class:`Storage`
rather than to the filesystem directly. :class:`FileStorage` is what the
CLI uses; :class:`MemoryStorage` honours the same contract without touching
disk, which keeps unit tests hermetic.

Each ``write`` replaces the whole document. There are no partial updates.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from git_ignore.config import _atomic_write
from git_ignore.exceptions import GitIgnoreError, StorageError

M = TypeVar("M", bound=BaseModel)


class Storage(ABC):
    """A single persisted text document."""

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location used in error messages."""

    @abstractmethod
    def read(self) -> Optional[str]:
        """Return the stored text, or ``None`` if nothing has been stored yet.

        Raises:
            StorageError: If the document exists but cannot be read.
        """

    @abstractmethod
    def write(self, text: str) -> None:
        """Replace the stored text atomically.

        Raises:
            StorageError: If the document cannot be written. The previous
                content is left intact.
        """


class FileStorage(Storage):
    """A JSON document on disk, written with temp-file-then-rename."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    @property
    def location(self) -> str:
        return str(self.path)

    def read(self) -> Optional[str]:
        if not self.path.is_file():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc

    def write(self, text: str) -> None:
        try:
            _atomic_write(self.path, text)
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc

    def __repr__(self) -> str:
        return f"FileStorage({str(self.path)!r})"


class MemoryStorage(Storage):
    """An in-memory document. ``writes`` counts successful writes."""

    def __init__(self, text: Optional[str] = None) -> None:
        self.text = text
        self.writes = 0

    @property
    def location(self) -> str:
        return "<memory>"

    def read(self) -> Optional[str]:
        return self.text

    def write(self, text: str) -> None:
        self.text = text
        self.writes += 1


def load_model(
    storage: Storage,
    model_cls: type[M],
    error_cls: type[GitIgnoreError] = StorageError,
) -> M:
    """Deserialise *model_cls* from *storage*.

    A missing document yields a default instance. Invalid JSON or a schema
    mismatch raises *error_cls*.
    """
    text = storage.read()
    if text is None:
        return model_cls()
    try:
        return model_cls.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise error_cls(f"Invalid data in {storage.location}: {exc}") from exc


def dump_model(model: BaseModel) -> str:
    """Serialise *model* to the pretty-printed JSON stored on disk."""
    return json.dumps(model.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"
