from __future__ import annotations

import os
from pathlib import Path, PurePath, PurePosixPath
from typing import Protocol


def display_name(name: str) -> str:
    """Undo surrogate escapes left by undecodable OS names; bad bytes become U+FFFD."""
    return os.fsencode(name).decode("utf-8", errors="replace")


class FileSystem(Protocol):
    """Narrow set of filesystem operations the index builder relies on."""

    def exists(self, path: PurePath) -> bool: ...

    def list_dirs(self, path: PurePath) -> list[str]: ...

    def list_files(self, path: PurePath) -> list[str]: ...

    def read_text(self, path: PurePath) -> str: ...

    def write_text(self, path: PurePath, text: str) -> None: ...

    def make_dirs(self, path: PurePath) -> None: ...


class LocalFileSystem:
    def exists(self, path: PurePath) -> bool:
        return Path(path).exists()

    def list_dirs(self, path: PurePath) -> list[str]:
        if not self.exists(path):
            return []
        # Directory-entry types only; symlinked directories are not followed.
        with os.scandir(path) as it:
            return [entry.name for entry in it if entry.is_dir(follow_symlinks=False)]

    def list_files(self, path: PurePath) -> list[str]:
        if not self.exists(path):
            return []
        with os.scandir(path) as it:
            return [entry.name for entry in it if entry.is_file(follow_symlinks=False)]

    def read_text(self, path: PurePath) -> str:
        return Path(path).read_text(encoding="utf-8")

    def write_text(self, path: PurePath, text: str) -> None:
        # Encode before opening so a bad string never truncates the old file.
        data = text.encode("utf-8")
        Path(path).write_bytes(data)

    def make_dirs(self, path: PurePath) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)


class MemoryFileSystem:
    """In-memory tree keyed by POSIX paths. Listing order is insertion order."""

    def __init__(self) -> None:
        self._dirs: dict[PurePosixPath, None] = {}
        self._files: dict[PurePosixPath, str] = {}

    @staticmethod
    def _key(path: PurePath | str) -> PurePosixPath:
        return PurePosixPath(str(path).replace("\\", "/"))

    def add_file(self, path: PurePath | str, text: str = "{}") -> None:
        key = self._key(path)
        self.make_dirs(key.parent)
        self.write_text(key, text)

    def add_dir(self, path: PurePath | str) -> None:
        self.make_dirs(self._key(path))

    def exists(self, path: PurePath) -> bool:
        key = self._key(path)
        return key in self._dirs or key in self._files

    def _children(self, path: PurePath, pool: dict[PurePosixPath, object]) -> list[str]:
        key = self._key(path)
        return [p.name for p in pool if p.parent == key and p != key]

    def list_dirs(self, path: PurePath) -> list[str]:
        return self._children(path, self._dirs)

    def list_files(self, path: PurePath) -> list[str]:
        return self._children(path, self._files)

    def read_text(self, path: PurePath) -> str:
        key = self._key(path)
        if key in self._dirs:
            raise IsADirectoryError(str(key))
        if key not in self._files:
            raise FileNotFoundError(str(key))
        return self._files[key]

    def write_text(self, path: PurePath, text: str) -> None:
        key = self._key(path)
        if key in self._dirs:
            raise IsADirectoryError(str(key))
        if key.parent not in self._dirs and key.parent != key:
            raise FileNotFoundError(str(key.parent))
        text.encode("utf-8")
        self._files[key] = text

    def make_dirs(self, path: PurePath) -> None:
        key = self._key(path)
        chain = [key, *key.parents]
        for p in chain:
            if p in self._files:
                raise NotADirectoryError(str(p))
        for p in reversed(chain):
            self._dirs.setdefault(p, None)
