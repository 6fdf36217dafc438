"""
restmodel - Quick Start Example
Run this against any REST API exposing /api/todos
"""

import logging

from restmodel import Collection, Model, RestClient, configure_logging
from restmodel.exceptions import RestModelError, NotFoundError


class Todo(Model):
    url_root = "/api/todos"
    rest_attributes = ("id", "title", "done")
    rest_attribute_defaults = {"done": False}


def main():
    """Quick start example"""

    logging.basicConfig()
    configure_logging("info")

    # ============================================
    # STEP 1: Initialize
    # ============================================
    print("🚀 restmodel Quick Start\n")

    client = RestClient(base_url="http://127.0.0.1:8000")
    todos = Collection(url="/api/todos")

    todo = todos.add(Todo({"title": "Write docs"}, collection=todos, client=client))
    todo.subscribe(lambda batch: print(f"   {batch.name}: {batch.keys()}"))

    print(f"✅ New todo {todo.unique_id} (new: {todo.is_new})\n")

    # ============================================
    # STEP 2: Create / Save
    # ============================================
    try:
        todo.save()
        print(f"✅ Created! ID: {todo.id}\n")

        todo.save({"done": True})
        print(f"✅ Updated: {todo.to_dict()}\n")

    except RestModelError as e:
        print(f"❌ Error saving todo: {e.message}")
        print(f"   Attributes after rollback: {todo.to_dict()}\n")
        return

    # ============================================
    # STEP 3: Fetch
    # ============================================
    try:
        todo.fetch()
        print(f"✅ Fetched: {todo.to_dict()}\n")
    except RestModelError as e:
        print(f"❌ Error fetching todo: {e.message}\n")

    # ============================================
    # STEP 4: Destroy
    # ============================================
    try:
        todo.destroy()
        print(f"✅ Deleted, {len(todos)} todo(s) left\n")
    except NotFoundError:
        print("⚠️  Already deleted on the server\n")
    except RestModelError as e:
        print(f"❌ Error deleting todo: {e.message}\n")

    print("🎉 Done!")


if __name__ == "__main__":
    main()
