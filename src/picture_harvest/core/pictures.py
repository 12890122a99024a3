# ABOUTME: Thread-safe accumulator for picture identifiers discovered during a scan
# ABOUTME: One instance per run, written by traversal workers and read after they join

import threading
from collections.abc import Iterable, Iterator


class PictureSet:
    """Deduplicated set of picture ids guarded by a lock.

    Membership test and insert happen under the same lock, so concurrent writers
    never lose an update or double count an id.
    """

    def __init__(self, ids: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._ids: set[str] = set(ids)

    def add(self, picture_id: str) -> bool:
        """Insert an id. Returns True if it was not already present."""
        with self._lock:
            if picture_id in self._ids:
                return False
            self._ids.add(picture_id)
            return True

    def to_list(self) -> list[str]:
        """Sorted snapshot of the ids."""
        with self._lock:
            return sorted(self._ids)

    def __contains__(self, picture_id: object) -> bool:
        with self._lock:
            return picture_id in self._ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_list())

    def __repr__(self) -> str:
        return f"PictureSet({len(self)} ids)"
