import pytest

from reflection_journal.reflection_store import ReflectionStore
from reflection_journal.storage import InMemoryStorage, JsonFileStorage


def test_in_memory_storage_basics():
    storage = InMemoryStorage()
    assert storage.get_item("reflections") is None

    storage.set_item("reflections", "[]")
    assert storage.get_item("reflections") == "[]"

    storage.remove_item("reflections")
    storage.remove_item("reflections")
    assert storage.get_item("reflections") is None


def test_json_file_storage_creates_directory(tmp_path):
    base = tmp_path / "data"
    storage = JsonFileStorage(str(base))

    assert storage.get_item("reflections") is None
    storage.set_item("reflections", '[{"content": "한국어"}]')

    assert (base / "reflections.json").exists()
    assert storage.get_item("reflections") == '[{"content": "한국어"}]'

    storage.remove_item("reflections")
    assert storage.get_item("reflections") is None


@pytest.mark.parametrize("key", ["../escape", "a/b", "", "with space"])
def test_json_file_storage_rejects_path_like_keys(tmp_path, key):
    storage = JsonFileStorage(str(tmp_path))
    with pytest.raises(ValueError):
        storage.set_item(key, "[]")


def test_store_persists_through_file_storage(tmp_path, clock):
    storage = JsonFileStorage(str(tmp_path))
    with ReflectionStore(storage, clock=clock) as store:
        reflection = store.add_reflection("2024-05-01", "Did X")
        store.add_action_plan(reflection.id, "Plan A")

    with ReflectionStore(JsonFileStorage(str(tmp_path))) as reopened:
        records = reopened.all()

    assert len(records) == 1
    assert records[0].content == "Did X"
    assert records[0].action_plans[0].text == "Plan A"


def test_store_load_survives_corrupt_file(tmp_path):
    (tmp_path / "reflections.json").write_text("{broken", encoding="utf-8")

    with ReflectionStore(JsonFileStorage(str(tmp_path))) as store:
        assert store.all() == []


def test_store_load_survives_invalid_key(tmp_path):
    store = ReflectionStore(JsonFileStorage(str(tmp_path)), key="../outside")
    assert store.load() == []
