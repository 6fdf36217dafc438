from unittest.mock import Mock

import pytest

from restmodel import UNDEFINED, Model

from .models import Todo


def test_construction_backfills_defaults(make_todo):
    todo = make_todo({})
    assert todo.attributes == {"name": "untitled"}
    assert todo.is_new
    assert todo.unique_id == "token-0"


def test_construction_strips_unknown_keys(make_todo):
    todo = make_todo({"id": 7, "name": "x", "secret": "s", "done": UNDEFINED})
    assert todo.attributes == {"id": 7, "name": "x"}
    assert not todo.is_new
    assert todo.unique_id == 7


def test_construction_options(make_todo):
    todo = make_todo({"secret": "s"}, strip_non_rest=False)
    assert todo.get("secret") == "s"


def test_client_token_is_generated_once(make_todo):
    todo = make_todo()
    assert todo.uuid == "token-0"
    todo.set({"name": "renamed"})
    assert todo.uuid == "token-0"
    assert make_todo().uuid == "token-1"


def test_default_id_generator(client):
    class Plain(Model):
        pass

    first, second = Plain(client=client), Plain(client=client)
    assert first.uuid and second.uuid
    assert first.uuid != second.uuid


def test_back_references_are_kept(make_todo):
    parent, root_store = object(), object()
    todo = make_todo(parent=parent, root_store=root_store)
    assert todo.parent is parent
    assert todo.root_store is root_store
    assert todo.collection is None


def test_accessors(todo):
    assert todo.id == 7
    assert todo.get("name") == "x"
    assert todo["done"] is False
    assert "name" in todo
    assert todo.get("missing") is None
    with pytest.raises(KeyError):
        todo["missing"]


def test_set_merges(todo):
    todo.set({"name": "y"})
    assert todo.attributes == {"id": 7, "name": "y", "done": False}


def test_set_replace(todo):
    todo.set({"name": "y"}, replace=True)
    assert todo.attributes == {"name": "y"}
    assert todo.is_new


def test_set_replace_keeps_extracted_identifier():
    class Renaming(Todo):
        def parse(self, data):
            return {"name": data.get("title")}

    model = Renaming({}, client=Mock())
    model.set({"id": 4, "title": "t"}, replace=True)
    assert model.attributes == {"name": "t", "id": 4}


def test_set_parsed_identifier_wins_over_raw_value():
    class IntIds(Todo):
        def parse(self, data):
            if "id" in data:
                data = {**data, "id": int(data["id"])}
            return data

    model = IntIds({}, client=Mock())
    model.set({"id": "7", "name": "a"})
    assert model.id == 7
    assert model.unique_id == 7
    model.set({"id": "8"}, replace=True)
    assert model.attributes == {"id": 8}


def test_set_empty_replace_is_idempotent(todo):
    todo.set({}, replace=True)
    assert todo.attributes == {}
    todo.set({}, replace=True)
    assert todo.attributes == {}


def test_set_is_one_batch(todo):
    listener = Mock()
    todo.subscribe(listener)
    todo.set({"name": "y", "done": True})
    listener.assert_called_once()
    assert listener.call_args[0][0].keys() == ["name", "done"]


def test_failing_parse_leaves_attributes_untouched():
    class Strict(Todo):
        def parse(self, data):
            if "name" in data and not isinstance(data["name"], str):
                raise TypeError("name must be a string")
            return data

    model = Strict({"id": 1, "name": "a"}, client=Mock())
    with pytest.raises(TypeError):
        model.set({"id": 2, "name": 5})
    assert model.attributes == {"id": 1, "name": "a"}


def test_set_without_parse():
    class Upper(Todo):
        def parse(self, data):
            return {key: value.upper() if isinstance(value, str) else value for key, value in data.items()}

    model = Upper({"name": "a"}, client=Mock())
    assert model.get("name") == "A"
    model.set({"name": "b"}, parse=False)
    assert model.get("name") == "b"


def test_clear_twice(todo):
    todo.clear()
    todo.clear()
    assert todo.attributes == {}
    assert todo.is_new
    assert todo.unique_id == todo.uuid


def test_pick_and_to_dict(todo):
    assert todo.pick(["name", "missing"]) == {"name": "x"}
    assert todo.to_dict() == {"id": 7, "name": "x", "done": False}
    snapshot = todo.pick()
    snapshot["name"] = "changed"
    assert todo.get("name") == "x"


def test_request_labels(todo):
    listener = Mock()
    todo.labels.subscribe(listener)
    todo.set_request_label("saving", True)
    assert todo.saving and not todo.fetching and not todo.deleting
    listener.assert_called_once_with("saving", True)
    todo.set_request_label("saving")
    assert not todo.saving
    with pytest.raises(ValueError):
        todo.set_request_label("uploading", True)


def test_schema_is_built_from_class_attributes(todo):
    assert todo.schema.rest_attributes == ("id", "name", "done")
    assert todo.schema.defaults == {"name": "untitled"}


def test_custom_id_attribute(client):
    class Page(Model):
        id_attribute = "slug"
        url_root = "/api/pages"
        rest_attributes = ("title",)

    page = Page({"slug": "home", "title": "Home", "id": 3}, client=client)
    assert page.attributes == {"slug": "home", "title": "Home"}
    assert page.id == "home"
    assert page.url() == "/api/pages/home"


def test_default_client_is_created_lazily(monkeypatch):
    created = []

    class FakeClient:
        def __init__(self):
            created.append(self)

    monkeypatch.setattr("restmodel.model.RestClient", FakeClient)
    model = Model()
    assert created == []
    assert model.client is model.client
    assert len(created) == 1
