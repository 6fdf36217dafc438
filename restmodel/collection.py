"""
Collections of models
"""

from typing import Any, Dict, Iterable, Iterator, Optional, Protocol, runtime_checkable


@runtime_checkable
class CollectionLike(Protocol):
    """What a model needs from the collection that owns it"""

    url: Any

    def add(self, model: Any) -> Any:
        ...

    def remove(self, model: Any) -> Any:
        ...


class Collection:
    """
    Ordered set of models keyed by ``unique_id``

    Example:
        >>> todos = Collection(url="/api/todos")
        >>> todo = todos.add(Todo({"title": "Write docs"}, collection=todos))
        >>> todo.url()
        '/api/todos'
    """

    def __init__(self, models: Optional[Iterable[Any]] = None, url: Any = None):
        self.url = url
        self._models: Dict[Any, Any] = {}
        for model in models or ():
            self.add(model)

    def add(self, model: Any) -> Any:
        """Add a model, replacing any model with the same ``unique_id``"""
        # drop the entry kept under a previous key, e.g. the token before create
        for key, member in list(self._models.items()):
            if member is model and key != model.unique_id:
                del self._models[key]
        self._models[model.unique_id] = model
        return model

    def remove(self, model: Any) -> Optional[Any]:
        """Remove a model; returns it, or None if it was not a member"""
        for key, member in list(self._models.items()):
            if member is model or key == model.unique_id:
                return self._models.pop(key)
        return None

    def get(self, unique_id: Any) -> Optional[Any]:
        for key, member in self._models.items():
            if key == unique_id or member.unique_id == unique_id:
                return member
        return None

    def to_list(self):
        """Attribute snapshots of every model, in order"""
        return [model.pick() for model in self._models.values()]

    def __contains__(self, model: object) -> bool:
        return any(member is model for member in self._models.values())

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._models.values()))

    def __len__(self) -> int:
        return len(self._models)

    def __repr__(self):
        return f"Collection(url={self.url!r}, count={len(self)})"
