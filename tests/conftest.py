"""Shared fixtures: an in-memory bucket standing in for the storage client."""

from datetime import datetime, timedelta, timezone

import pytest

from bucketsync.models.remote_object import RemoteObject

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeStorage:
    """In-memory bucket implementing the storage client interface."""

    bucket_name = "test-bucket"

    def __init__(self, objects=None):
        self.objects = {}
        self.puts = []
        self.deletes = []
        self.lists = []
        self._tick = 0
        for obj in objects or []:
            self.objects[obj.name] = obj

    def _now(self):
        self._tick += 1
        return EPOCH + timedelta(days=365, seconds=self._tick)

    def put(self, key, local_path, options=None):
        self.puts.append((key, local_path, options))
        self.objects[key] = RemoteObject(name=key, last_modified=self._now())

    def upload_json(self, key, data, options=None):
        self.puts.append((key, data, options))
        self.objects[key] = RemoteObject(name=key, last_modified=self._now())

    def list(self, prefix=""):
        self.lists.append(prefix)
        return [obj for name, obj in self.objects.items() if name.startswith(prefix)]

    def delete(self, key):
        self.deletes.append(key)
        self.objects.pop(key, None)

    def delete_multi(self, keys):
        keys = list(keys)
        for key in keys:
            self.objects.pop(key, None)
        self.deletes.extend(keys)
        return keys


def remote(name, days=0):
    """RemoteObject modified *days* after the fixture epoch."""
    return RemoteObject(name=name, last_modified=EPOCH + timedelta(days=days))


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def site_tree(tmp_path):
    """A small build output directory."""
    root = tmp_path / "dist"
    (root / "js").mkdir(parents=True)
    (root / "css").mkdir()
    (root / "js" / "app.a1b2c3.js").write_text("console.log('app')")
    (root / "js" / "app.a1b2c3.js.map").write_text("{}")
    (root / "js" / "vendor.d4e5f6.bundle.js").write_text("/* vendor */")
    (root / "css" / "main.9f8e7d.css").write_text("body{}")
    (root / "robots.txt").write_text("User-agent: *")
    return root
