import os
import stat
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class EntryStat:
    is_dir: bool
    is_file: bool
    is_symlink: bool
    size: int
    mtime: float


class FileSystem(ABC):
    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True when the path exists (without following a final symlink)."""

    @abstractmethod
    def list_dir(self, path: str) -> list[str]:
        """Return the entry names of a directory in listing order."""

    @abstractmethod
    def stat(self, path: str) -> EntryStat:
        """Return metadata for a path without following symlinks."""

    @abstractmethod
    def remove(self, path: str) -> None:
        """Delete a single regular file."""


class LocalFileSystem(FileSystem):
    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def list_dir(self, path: str) -> list[str]:
        with os.scandir(path) as entries:
            return [entry.name for entry in entries]

    def stat(self, path: str) -> EntryStat:
        result = os.lstat(path)
        mode = result.st_mode
        return EntryStat(
            is_dir=stat.S_ISDIR(mode),
            is_file=stat.S_ISREG(mode),
            is_symlink=stat.S_ISLNK(mode),
            size=int(result.st_size),
            mtime=float(result.st_mtime),
        )

    def remove(self, path: str) -> None:
        os.unlink(path)
