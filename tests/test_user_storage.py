"""UserStorage tests."""

from hazardmap.client.user_storage import StoredUser, UserStorage


def test_empty_storage_returns_none(tmp_path):
    assert UserStorage(tmp_path / "user.json").get() is None


def test_set_get_clear(tmp_path):
    storage = UserStorage(tmp_path / "nested" / "user.json")
    stored = storage.set({"id": 3, "username": "kim", "email": "kim@test.com", "created_at": "2026-01-01"})
    assert stored == StoredUser(id=3, username="kim", email="kim@test.com")
    assert storage.get() == stored

    storage.clear()
    assert storage.get() is None
    storage.clear()


def test_corrupt_file_reads_as_none(tmp_path):
    path = tmp_path / "user.json"
    path.write_text("{not json", encoding="utf-8")
    assert UserStorage(path).get() is None

    path.write_text('{"username": "no id"}', encoding="utf-8")
    assert UserStorage(path).get() is None
