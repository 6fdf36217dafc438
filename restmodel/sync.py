"""
Synchronization of a model with its REST resource

Each operation applies its local effects (optimistic update, reconciliation
or rollback) inside a named store transaction and either returns the model
or raises the transport error. Operations on one model are serialized.
"""

import logging
import threading
from typing import Any, Dict, Optional, TYPE_CHECKING

from .exceptions import NotFoundError
from . import pipeline

if TYPE_CHECKING:
    from .model import Model

logger = logging.getLogger(__name__)


class SyncEngine:
    """Runs fetch/save/create/destroy for a single model"""

    def __init__(self, model: "Model"):
        self.model = model
        self._lock = threading.RLock()

    def _url(self, url: Optional[str]) -> str:
        return url if url else self.model.url()

    def fetch(self, url: Optional[str] = None, params: Optional[Dict[str, Any]] = None) -> "Model":
        """
        Load the model from the server with a GET request

        The response is backfilled with defaults and merged into the
        current attributes.
        """
        model = self.model
        with self._lock:
            url = self._url(url)
            logger.debug("fetch %s", url)
            model.set_request_label("fetching", True)

            try:
                body = model.client.get(url, params=params or {})
                with model.attributes.transaction("fetch-success"):
                    model.set(pipeline.with_defaults(body, model.schema.defaults))
            finally:
                model.set_request_label("fetching", False)
            return model

    def save(
        self,
        data: Optional[Dict[str, Any]] = None,
        wait: bool = False,
        strip_non_rest: bool = True,
        replace: bool = False,
        method: str = "patch",
        url: Optional[str] = None,
        parse: bool = True,
        strip_undefined: bool = True,
    ) -> "Model":
        """
        Save the model to the server, by default with a PATCH request

        New models are handed over to ``create``. Unless ``wait`` is set the
        data is applied locally before the request and rolled back if the
        request or the reconciliation of its response fails.
        """
        model = self.model
        set_options = dict(
            parse=parse,
            strip_undefined=strip_undefined,
            strip_non_rest=strip_non_rest,
            replace=replace,
        )
        with self._lock:
            original = model.attributes.snapshot()

            if strip_non_rest:
                data = pipeline.strip_non_rest(data, model.schema)
            if data is None:
                data = dict(original)
            data = pipeline.strip_undefined(data)

            if model.is_new:
                return self.create(data, wait=wait, url=url)

            url = self._url(url)
            logger.debug("save %s %s (wait=%s)", method.upper(), url, wait)

            if wait:
                model.set_request_label("saving", True)
            else:
                model.set(data, **set_options)

            try:
                body = getattr(model.client, method.lower())(url, json=data)
                with model.attributes.transaction("save-success"):
                    model.set({**data, **(body or {})}, **set_options)
            except Exception:
                if not wait:
                    logger.warning("save of %s failed, restoring attributes", model.unique_id)
                    with model.attributes.transaction("save-error"):
                        model.attributes.replace(original)
                raise
            finally:
                model.set_request_label("saving", False)
            return model

    def create(
        self,
        data: Optional[Dict[str, Any]] = None,
        wait: bool = False,
        method: str = "post",
        not_attributes: bool = False,
        url: Optional[str] = None,
    ) -> "Model":
        """
        Create the model on the server, by default with a POST request

        The response is authoritative: a server assigned identifier found in
        it makes the model persisted.
        """
        model = self.model
        with self._lock:
            original = model.attributes.snapshot()

            if data is not None:
                if not not_attributes:
                    data = {**original, **data}
            else:
                data = dict(original)
            data = pipeline.strip_undefined(data)

            url = self._url(url)
            logger.debug("create %s %s (wait=%s)", method.upper(), url, wait)

            if wait:
                model.set_request_label("saving", True)
            else:
                model.set(data)

            try:
                body = getattr(model.client, method.lower())(url, json=data)
                with model.attributes.transaction("create-success"):
                    model.set(body)
            except Exception:
                if not wait:
                    logger.warning("create of %s failed, restoring attributes", model.unique_id)
                    with model.attributes.transaction("create-error"):
                        model.attributes.replace(original)
                raise
            finally:
                model.set_request_label("saving", False)
            return model

    def destroy(self, wait: bool = False, url: Optional[str] = None) -> "Model":
        """
        Delete the model on the server with a DELETE request

        The model is removed from its collection right away unless ``wait``
        is set, and put back if the request fails with anything but a 404.
        """
        model = self.model
        collection = model.collection
        with self._lock:
            if model.is_new and collection is not None:
                collection.remove(model)
                return model

            url = self._url(url)
            logger.debug("destroy %s (wait=%s)", url, wait)

            if not wait and collection is not None:
                collection.remove(model)
            else:
                model.set_request_label("deleting", True)

            try:
                model.client.delete(url)
            except NotFoundError:
                if not wait and collection is not None:
                    logger.info("%s already deleted on the server", model.unique_id)
                model.set_request_label("deleting", False)
                raise
            except Exception:
                if not wait and collection is not None:
                    collection.add(model)
                model.set_request_label("deleting", False)
                raise

            if wait and collection is not None:
                collection.remove(model)
            model.set_request_label("deleting", False)
            return model

