import pytest

from restmodel import Collection, ConfigurationError
from restmodel.url import base_url, resolve_url

from .models import Comment


def test_base_url_prefers_url_root():
    assert base_url("/api/todos", Collection(url="/api/other")) == "/api/todos"


def test_base_url_accepts_callables():
    assert base_url(lambda: "/api/todos") == "/api/todos"
    assert base_url(None, Collection(url=lambda: "/api/comments")) == "/api/comments"


def test_base_url_without_source():
    with pytest.raises(ConfigurationError):
        base_url(None, None)
    with pytest.raises(ConfigurationError):
        base_url(None, Collection())


@pytest.mark.parametrize(
    "base, url_id, is_new, expected",
    [
        ("/api/todos", 7, True, "/api/todos"),
        ("/api/todos", 7, False, "/api/todos/7"),
        ("/api/todos/", 7, False, "/api/todos/7"),
        ("/api/todos", "a b/c", False, "/api/todos/a%20b%2Fc"),
    ],
)
def test_resolve_url(base, url_id, is_new, expected):
    assert resolve_url(base, url_id, is_new) == expected


def test_model_url(make_todo):
    assert make_todo().url() == "/api/todos"
    assert make_todo({"id": 3}).url() == "/api/todos/3"


def test_model_url_from_collection(client, collection):
    comment = Comment({"id": "c1"}, collection=collection, client=client)
    assert comment.url() == "/api/comments/c1"


def test_model_url_root_override(client):
    comment = Comment({"id": 1}, client=client, url_root="/api/posts/2/comments")
    assert comment.url() == "/api/posts/2/comments/1"


def test_model_url_without_source(client):
    with pytest.raises(ConfigurationError):
        Comment({"id": 1}, client=client).url()


def test_model_url_id_override(client):
    class Article(Comment):
        url_root = "/api/articles"
        rest_attributes = ("id", "slug")

        @property
        def url_id(self):
            return self.get("slug")

    article = Article({"id": 1, "slug": "hello-world"}, client=client)
    assert article.url() == "/api/articles/hello-world"
