"""Concurrently writable mapping of module identity to import references."""

import itertools
import threading
from collections.abc import Iterator, Mapping, Sequence

DEFAULT_SHARD_COUNT = 16


class ImportMap(Mapping[str, list[str]]):
    """Identity -> references map with per-shard locking.

    Keys are routed to one of a fixed number of shards, each guarded by its
    own lock, so writers touching different shards never block each other.
    A duplicate identity overwrites the previous references; it keeps the
    position of its first insertion.

    Reads go through `snapshot()`, which must only be taken once every writer
    has finished.
    """

    def __init__(self, shard_count: int = DEFAULT_SHARD_COUNT):
        """Initialize an empty map.

        Args:
            shard_count: Number of independently locked shards
        """
        if shard_count < 1:
            raise ValueError(f"shard_count must be positive, got {shard_count}")
        self._shards: list[dict[str, tuple[int, list[str]]]] = [
            {} for _ in range(shard_count)
        ]
        self._locks = [threading.Lock() for _ in range(shard_count)]
        self._sequence = itertools.count()

    def _shard_index(self, identity: str) -> int:
        return hash(identity) % len(self._shards)

    def insert(self, identity: str, references: Sequence[str]) -> None:
        """Store the references of a module, replacing any previous entry.

        Args:
            identity: Module identity
            references: Referenced identities in file order
        """
        index = self._shard_index(identity)
        with self._locks[index]:
            shard = self._shards[index]
            previous = shard.get(identity)
            order = previous[0] if previous is not None else next(self._sequence)
            shard[identity] = (order, list(references))

    def snapshot(self) -> dict[str, list[str]]:
        """Return a plain dict copy in first-insertion order."""
        entries: list[tuple[int, str, list[str]]] = []
        for lock, shard in zip(self._locks, self._shards):
            with lock:
                entries.extend(
                    (order, identity, list(references))
                    for identity, (order, references) in shard.items()
                )
        entries.sort(key=lambda entry: entry[0])
        return {identity: references for _, identity, references in entries}

    def __getitem__(self, identity: str) -> list[str]:
        index = self._shard_index(identity)
        with self._locks[index]:
            return list(self._shards[index][identity][1])

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        total = 0
        for lock, shard in zip(self._locks, self._shards):
            with lock:
                total += len(shard)
        return total

    def __repr__(self) -> str:
        return f"ImportMap({self.snapshot()!r})"
