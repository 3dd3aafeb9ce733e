"""Shared, append-only collection of training strings."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional, overload


class Dataset:
    """Ordered sequence of strings shared by reference between trainers.

    Every holder of a :class:`Dataset` sees appends made by any other holder
    immediately. There is no deduplication and no removal; :meth:`replace`
    swaps the whole content in place.
    """

    def __init__(self, strings: Optional[Iterable[str]] = None) -> None:
        self._strings: List[str] = list(strings) if strings is not None else []

    @classmethod
    def from_file(cls, path: str | Path, *, max_lines: Optional[int] = None) -> "Dataset":
        """Read one string per line, skipping blank lines."""

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Dataset file not found: {path}")
        strings: List[str] = []
        with path.open(encoding="utf-8") as handle:
            for line in handle:
                if max_lines is not None and len(strings) >= max_lines:
                    break
                line = line.rstrip("\r\n")
                if line:
                    strings.append(line)
        return cls(strings)

    def replace(self, strings: Iterable[str]) -> None:
        self._strings[:] = list(strings)

    def append(self, string: str) -> None:
        self._strings.append(string)

    def extend(self, strings: Iterable[str]) -> None:
        self._strings.extend(strings)

    def __len__(self) -> int:
        return len(self._strings)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> List[str]: ...

    def __getitem__(self, index):
        return self._strings[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._strings)

    def to_list(self) -> List[str]:
        return list(self._strings)

    def __repr__(self) -> str:
        return f"Dataset(size={len(self._strings)})"


__all__ = ["Dataset"]
