"""
Observable attribute store

An ordered key/value container holding a model's current known state.
Observers receive one batch of changes per outermost transaction, so a
multi-key reconciliation is never seen half applied.
"""

import copy
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class Change:
    """A single key mutation. ``old``/``new`` are ``None`` for add/delete"""
    key: str
    kind: str  # "add", "update" or "delete"
    old: Any = None
    new: Any = None


@dataclass
class ChangeBatch:
    """Changes made inside one transaction"""
    name: str
    changes: List[Change] = field(default_factory=list)

    def keys(self) -> List[str]:
        return [change.key for change in self.changes]


Listener = Callable[[ChangeBatch], None]


class AttributeStore:
    """Ordered observable mapping with atomic change batching

    Example:
        >>> store = AttributeStore({"name": "untitled"})
        >>> unsubscribe = store.subscribe(print)
        >>> with store.transaction("rename"):
        ...     store.set("name", "x")
        ...     store.set("done", False)
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})
        self._listeners: List[Listener] = []
        self._depth = 0
        self._batch: Optional[ChangeBatch] = None

    # Reading

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._data

    def keys(self):
        return self._data.keys()

    def snapshot(self) -> Dict[str, Any]:
        """Deep copy of the current state, safe to hand out and restore"""
        return copy.deepcopy(self._data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeStore):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def __repr__(self):
        return f"AttributeStore({self._data!r})"

    # Writing

    def set(self, key: str, value: Any) -> None:
        with self.transaction("set"):
            old = self._data.get(key, _MISSING)
            if old is _MISSING:
                self._data[key] = value
                self._record(Change(key, "add", new=value))
            elif old != value:
                self._data[key] = value
                self._record(Change(key, "update", old=old, new=value))

    def delete(self, key: str) -> None:
        with self.transaction("delete"):
            if key in self._data:
                old = self._data.pop(key)
                self._record(Change(key, "delete", old=old))

    def merge(self, data: Mapping[str, Any]) -> None:
        """Set every key of ``data``, keeping keys it does not mention"""
        with self.transaction("merge"):
            for key, value in data.items():
                self.set(key, value)

    def replace(self, data: Mapping[str, Any]) -> None:
        """Make the store equal to ``data``, in the order of ``data``"""
        with self.transaction("replace"):
            for key in [key for key in self._data if key not in data]:
                self.delete(key)
            self.merge(data)
            if list(self._data) != list(data):
                self._data = {key: self._data[key] for key in data}

    def clear(self) -> None:
        with self.transaction("clear"):
            for key in list(self._data):
                self.delete(key)

    # Observing

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @contextmanager
    def transaction(self, name: str) -> Iterator["AttributeStore"]:
        """Group mutations into one notification

        Nested transactions are folded into the outermost one, which also
        gives the batch its name.
        """
        self._depth += 1
        if self._depth == 1:
            self._batch = ChangeBatch(name)
        try:
            yield self
        finally:
            self._depth -= 1
            if self._depth == 0:
                batch, self._batch = self._batch, None
                if batch.changes:
                    self._notify(batch)

    def _record(self, change: Change) -> None:
        self._batch.changes.append(change)

    def _notify(self, batch: ChangeBatch) -> None:
        logger.debug("%s: %d change(s) to %s", batch.name, len(batch.changes), batch.keys())
        for listener in list(self._listeners):
            listener(batch)
