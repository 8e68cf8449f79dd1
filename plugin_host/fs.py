"""File-system driver used by the plugin loader. Async API; local driver runs blocking I/O in threads."""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class DirStat:
    """Directory entry. path is relative to the listed directory."""

    path: str
    is_directory: bool


@runtime_checkable
class FsDriver(Protocol):
    """Minimal file-system access needed to discover and read plugins."""

    async def exists(self, path: str) -> bool:
        """True if a file or directory exists at path."""

    async def read_file(self, path: str) -> str:
        """Read a UTF-8 text file. Raises OSError if missing."""

    async def read_dir_stats(self, path: str) -> list[DirStat]:
        """Immediate entries of a directory."""


class LocalFsDriver:
    """FsDriver over the local file system."""

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(Path(path).exists)

    async def read_file(self, path: str) -> str:
        return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")

    async def read_dir_stats(self, path: str) -> list[DirStat]:
        return await asyncio.to_thread(self._read_dir_stats, Path(path))

    @staticmethod
    def _read_dir_stats(path: Path) -> list[DirStat]:
        return [DirStat(path=entry.name, is_directory=entry.is_dir()) for entry in path.iterdir()]
