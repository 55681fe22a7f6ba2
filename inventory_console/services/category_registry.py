from typing import Iterable, Iterator, List, Optional


class CategoryRegistry:
    """Sorted set of category names, unique case-insensitively."""

    def __init__(self, names: Iterable[str] = ()):
        self._names: List[str] = []
        self.merge(names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    @property
    def names(self) -> List[str]:
        return list(self._names)

    def first(self) -> Optional[str]:
        return self._names[0] if self._names else None

    def find(self, name: str, exclude: Optional[str] = None) -> Optional[str]:
        """Return the stored name equal to `name` ignoring case, skipping `exclude`."""
        wanted = name.lower()
        skipped = exclude.lower() if exclude is not None else None
        for existing in self._names:
            lowered = existing.lower()
            if lowered == wanted and lowered != skipped:
                return existing
        return None

    def insert(self, name: str) -> bool:
        if self.find(name) is not None:
            return False
        self._names.append(name)
        self._names.sort()
        return True

    def replace(self, old: str, new: str) -> None:
        self._names = sorted(new if name == old else name for name in self._names)

    def discard(self, name: str) -> None:
        self._names = [existing for existing in self._names if existing != name]

    def merge(self, names: Iterable[str]) -> List[str]:
        """Sorted union with `names`. Returns the names that were actually added."""
        added = []
        for name in names:
            if name and self.find(name) is None:
                self._names.append(name)
                added.append(name)
        self._names.sort()
        return added
