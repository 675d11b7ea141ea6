from __future__ import annotations

import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path


class StorageError(RuntimeError):
    """Raised when a store cannot read, write or remove a blob."""


class BlobStore(ABC):
    """Opaque string storage addressed by key."""

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def remove(self, key: str) -> None: ...


class MemoryStore(BlobStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.blobs: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self.blobs[key] = value

    def remove(self, key: str) -> None:
        self.blobs.pop(key, None)


_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileStore(BlobStore):
    """One ``<key>.json`` file per key inside *directory*."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=path.stem, suffix=".tmp"
            )
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except OSError as e:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise StorageError(f"Cannot write {path}: {e}") from e

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot remove {path}: {e}") from e
