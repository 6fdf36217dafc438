"""
restmodel - client-side models synchronized with a REST API
Optimistic fetch/save/create/destroy over an observable attribute store
"""

__version__ = "1.0.0"

from .model import Model
from .collection import Collection, CollectionLike
from .client import RestClient
from .schema import AttributeSchema
from .store import AttributeStore, Change, ChangeBatch
from .pipeline import UNDEFINED
from .config import settings, configure_logging
from .exceptions import (
    RestModelError,
    ConfigurationError,
    TransportError,
    NotFoundError,
    AuthenticationError,
    ValidationError,
    ConnectionError
)

__all__ = [
    "Model",
    "Collection",
    "CollectionLike",
    "RestClient",
    "AttributeSchema",
    "AttributeStore",
    "Change",
    "ChangeBatch",
    "UNDEFINED",
    "settings",
    "configure_logging",
    "RestModelError",
    "ConfigurationError",
    "TransportError",
    "NotFoundError",
    "AuthenticationError",
    "ValidationError",
    "ConnectionError"
]
