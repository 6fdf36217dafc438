"""
Resource URL resolution
"""

from typing import Any, Callable, Optional, Union
from urllib.parse import quote

from .exceptions import ConfigurationError

UrlSource = Union[str, Callable[[], str], None]


def _result(source: Any) -> Optional[str]:
    """Value of a URL given either as a string or as a zero-argument callable"""
    if callable(source):
        return source()
    return source


def base_url(url_root: UrlSource = None, collection: Any = None) -> str:
    """
    Base URL for a model

    Args:
        url_root: The model's own root URL, or a callable returning it
        collection: Owning collection; its ``url`` is used when there is no root

    Raises:
        ConfigurationError: When neither source yields a URL
    """
    base = _result(url_root)
    if not base and collection is not None:
        base = _result(getattr(collection, "url", None))
    if not base:
        raise ConfigurationError('A "url_root" or collection "url" must be specified')
    return base


def resolve_url(base: str, url_id: Any, is_new: bool) -> str:
    """Append the URL-encoded ``url_id`` to ``base`` for persisted models"""
    if is_new:
        return base
    separator = "" if base.endswith("/") else "/"
    return f"{base}{separator}{quote(str(url_id), safe='')}"
