from unittest.mock import Mock

import pytest

from restmodel import Collection, RestClient

from .models import Todo


@pytest.fixture
def client():
    client = Mock(spec=RestClient)
    for method in ("get", "post", "put", "patch", "delete"):
        getattr(client, method).return_value = {}
    return client


@pytest.fixture
def make_todo(client):
    tokens = iter(f"token-{i}" for i in range(1000))

    def _make(data=None, **kwargs):
        kwargs.setdefault("client", client)
        kwargs.setdefault("id_generator", lambda: next(tokens))
        return Todo(data, **kwargs)

    return _make


@pytest.fixture
def todo(make_todo):
    return make_todo({"id": 7, "name": "x", "done": False})


@pytest.fixture
def collection():
    return Collection(url="/api/comments")
