"""
Model: a local mirror of one REST resource
"""

import uuid
from typing import Any, Callable, Dict, Iterable, Optional

from . import pipeline
from .client import RestClient
from .labels import RequestLabelTracker
from .schema import AttributeSchema
from .store import AttributeStore, Listener
from .sync import SyncEngine
from .url import base_url, resolve_url


def _default_id_generator() -> str:
    return str(uuid.uuid4())


class Model:
    """
    Client-side entity synchronized with a REST resource

    Subclasses describe the resource through class attributes:

    Example:
        >>> class Todo(Model):
        ...     url_root = "/api/todos"
        ...     rest_attributes = ("id", "title", "done")
        ...     rest_attribute_defaults = {"done": False}
        >>> todo = Todo({"title": "Write docs"}, client=RestClient())
        >>> todo.save()
        >>> todo.set({"done": True})
        >>> todo.save()
        >>> todo.destroy()
    """

    id_attribute: str = "id"
    rest_attributes: Iterable[str] = ()
    rest_attribute_defaults: Dict[str, Any] = {}
    url_root: Any = None

    def __init__(
        self,
        data: Optional[Dict[str, Any]] = None,
        collection: Any = None,
        parent: Any = None,
        root_store: Any = None,
        client: Optional[RestClient] = None,
        id_generator: Optional[Callable[[], str]] = None,
        url_root: Any = None,
        parse: bool = True,
        strip_undefined: bool = True,
        strip_non_rest: bool = True,
    ):
        """
        Initialize a model

        Args:
            data: Initial attributes, backfilled with defaults
            collection: Owning collection, used for its URL and on destroy
            parent: Optional parent reference, not owned
            root_store: Optional application store reference, not owned
            client: Transport used for requests (default: a RestClient
                    built from settings)
            id_generator: Callable producing the client-side token
            url_root: Overrides the class level ``url_root``
            parse: Pass ``data`` through ``parse``
            strip_undefined: Drop UNDEFINED values from ``data``
            strip_non_rest: Drop keys not in ``rest_attributes``
        """
        self.uuid = (id_generator or _default_id_generator)()
        self.collection = collection
        self.parent = parent
        self.root_store = root_store
        if url_root is not None:
            self.url_root = url_root

        self.schema = AttributeSchema(
            id_attribute=self.id_attribute,
            rest_attributes=tuple(self.rest_attributes),
            defaults=dict(self.rest_attribute_defaults),
        )
        self.attributes = AttributeStore()
        self.labels = RequestLabelTracker()
        self._client = client
        self._sync = SyncEngine(self)

        self.set(
            pipeline.with_defaults(data, self.schema.defaults),
            parse=parse,
            strip_undefined=strip_undefined,
            strip_non_rest=strip_non_rest,
        )

    @property
    def client(self) -> RestClient:
        if self._client is None:
            self._client = RestClient()
        return self._client

    # Identity

    @property
    def id(self) -> Any:
        return self.attributes.get(self.id_attribute)

    @property
    def url_id(self) -> Any:
        """Identifier used in the URL; override to address by another key"""
        return self.id

    @property
    def unique_id(self) -> Any:
        """Server id, or the client token while the model is new"""
        return self.id if pipeline.has_value(self.id) else self.uuid

    @property
    def is_new(self) -> bool:
        return not pipeline.has_value(self.id)

    def url(self) -> str:
        """
        The model URL

        Raises:
            ConfigurationError: When neither ``url_root`` nor the collection
                                provides a URL
        """
        return resolve_url(base_url(self.url_root, self.collection), self.url_id, self.is_new)

    # Request labels

    @property
    def fetching(self) -> bool:
        return self.labels.get("fetching")

    @property
    def saving(self) -> bool:
        return self.labels.get("saving")

    @property
    def deleting(self) -> bool:
        return self.labels.get("deleting")

    def set_request_label(self, label: str, state: bool = False) -> None:
        self.labels.set_label(label, state)

    # Attributes

    def parse(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Convert raw API data into attributes. Identity by default"""
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Dictionary-like get method"""
        return self.attributes.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-like access"""
        return self.attributes[key]

    def __contains__(self, key: object) -> bool:
        return key in self.attributes

    def set(
        self,
        data: Optional[Dict[str, Any]] = None,
        parse: bool = True,
        strip_undefined: bool = True,
        strip_non_rest: bool = True,
        replace: bool = False,
    ) -> "Model":
        """
        Admit ``data`` into the attributes, merging by default

        Args:
            data: Attributes to set
            parse: Pass ``data`` through ``parse`` first
            strip_undefined: Drop UNDEFINED values
            strip_non_rest: Drop keys not in ``rest_attributes``
            replace: Replace all attributes instead of merging

        Returns:
            The model itself
        """
        identifier, data = pipeline.admit(
            data,
            self.schema,
            parse=self.parse if parse else None,
            strip_undefined_values=strip_undefined,
            strip_non_rest_keys=strip_non_rest,
        )

        # parse output wins over the raw identifier when it yields the id key
        with self.attributes.transaction("set"):
            if replace:
                self.attributes.replace(data)
                if identifier is not pipeline.UNDEFINED and self.id_attribute not in data:
                    self.attributes.set(self.id_attribute, identifier)
            else:
                if identifier is not pipeline.UNDEFINED:
                    self.attributes.set(self.id_attribute, identifier)
                self.attributes.merge(data)
        return self

    def clear(self) -> "Model":
        self.attributes.clear()
        return self

    def pick(self, keys: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """Plain-dict snapshot of ``keys`` (all attributes when omitted)"""
        snapshot = self.attributes.snapshot()
        if keys is None:
            return snapshot
        return {key: snapshot[key] for key in keys if key in snapshot}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return self.pick()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Observe attribute changes; returns an unsubscribe callable"""
        return self.attributes.subscribe(listener)

    # Synchronization

    def fetch(self, url: Optional[str] = None, params: Optional[Dict[str, Any]] = None) -> "Model":
        """
        Fetch the model from the server

        Example:
            >>> todo = Todo({"id": 7}).fetch()
        """
        return self._sync.fetch(url=url, params=params)

    def save(self, data: Optional[Dict[str, Any]] = None, **options) -> "Model":
        """
        Save the model, creating it first when it is new

        Options: ``wait``, ``strip_non_rest``, ``replace``, ``method``,
        ``url``, ``parse``, ``strip_undefined``. See ``SyncEngine.save``.

        Example:
            >>> todo.save({"done": True})
            >>> todo.save({"title": "Renamed"}, wait=True, method="put")
        """
        return self._sync.save(data, **options)

    def create(self, data: Optional[Dict[str, Any]] = None, **options) -> "Model":
        """Create the model on the server. Options: ``wait``, ``method``,
        ``not_attributes``, ``url``"""
        return self._sync.create(data, **options)

    def destroy(self, **options) -> "Model":
        """Delete the model on the server. Options: ``wait``, ``url``"""
        return self._sync.destroy(**options)

    def __repr__(self):
        return f"{type(self).__name__}(unique_id={self.unique_id!r}, attributes={self.attributes.snapshot()!r})"
