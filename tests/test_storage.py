"""Tests for the key-value store and keyed collections."""

import pytest
from sqlmodel import Session

from app.models import RSVPForm, Task
from app.storage import Collection, Document, KeyValueStore, keys


class TestKeyValueStore:
    """Tests for get/set/remove."""

    def test_get_missing_key(self, store: KeyValueStore):
        assert store.get("nothing_here") is None
        assert "nothing_here" not in store

    def test_set_and_get(self, store: KeyValueStore):
        store.set("greeting", "hello")
        assert store.get("greeting") == "hello"
        assert "greeting" in store

    def test_set_overwrites(self, store: KeyValueStore):
        """Test that the last write to a key wins."""
        store.set("k", "first")
        store.set("k", "second")
        assert store.get("k") == "second"

    def test_remove(self, store: KeyValueStore):
        store.set("k", "v")
        store.remove("k")
        assert store.get("k") is None

    def test_remove_missing_key_is_noop(self, store: KeyValueStore):
        store.remove("never_set")
        assert store.get("never_set") is None

    def test_keys_by_prefix(self, store: KeyValueStore):
        """Test prefix listing treats underscores literally."""
        store.set("tasks_1", "[]")
        store.set("tasks_2", "[]")
        store.set("tasksX3", "[]")
        store.set("notes_1", "[]")
        assert store.keys("tasks_") == ["tasks_1", "tasks_2"]

    def test_value_visible_from_another_session(self, store: KeyValueStore, engine):
        """Test that writes are committed and durable."""
        store.set("k", "durable")
        with Session(engine) as other:
            assert KeyValueStore(other).get("k") == "durable"


class TestKeys:
    """Tests for the namespaced key scheme."""

    def test_keys_are_namespaced_by_event(self):
        assert keys.tasks("a") != keys.tasks("b")
        assert keys.tasks("a") == "tasks_a"
        assert keys.rsvp_responses("a") == "rsvp_responses_a"

    def test_kinds_do_not_collide(self):
        assert len(set(keys.for_event("e1"))) == len(keys.EVENT_SCOPED)

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            keys.event_key("guests", "e1")


class TestCollection:
    """Tests for load/persist behaviour of keyed collections."""

    def test_absent_key_is_empty(self, store: KeyValueStore):
        collection = Collection(store, "tasks_e1", Task)
        assert collection.all() == []
        assert collection.exists() is False

    def test_round_trip(self, store: KeyValueStore, engine):
        """Test that a reloaded collection matches what was written."""
        collection = Collection(store, "tasks_e1", Task)
        first = collection.append(Task(event_id="e1", title="Book venue"))
        second = collection.append(Task(event_id="e1", title="Send invites", completed=True))

        with Session(engine) as other:
            reloaded = Collection(KeyValueStore(other), "tasks_e1", Task).all()
        assert reloaded == [first, second]

    def test_persisted_text_is_stable(self, store: KeyValueStore):
        """Test that load then save writes back identical text."""
        collection = Collection(store, "tasks_e1", Task)
        collection.append(Task(event_id="e1", title="Order cake"))
        before = store.get("tasks_e1")

        Collection(store, "tasks_e1", Task).save()
        assert store.get("tasks_e1") == before

    def test_every_mutation_rewrites_key(self, store: KeyValueStore):
        collection = Collection(store, "tasks_e1", Task)
        task = collection.append(Task(event_id="e1", title="Hire DJ"))
        collection.update(task.id, lambda t: setattr(t, "completed", True))

        reloaded = Collection(store, "tasks_e1", Task).get(task.id)
        assert reloaded.completed is True

    def test_corrupted_json_loads_as_empty(self, store: KeyValueStore, caplog):
        """Test that unparseable data is logged and treated as empty."""
        store.set("tasks_e1", "{not json")
        collection = Collection(store, "tasks_e1", Task)
        assert collection.all() == []
        assert "Error loading tasks_e1" in caplog.text

    def test_wrong_shape_loads_as_empty(self, store: KeyValueStore):
        store.set("tasks_e1", '{"id": "1"}')
        assert Collection(store, "tasks_e1", Task).all() == []

    def test_invalid_records_load_as_empty(self, store: KeyValueStore):
        store.set("tasks_e1", '[{"id": "1"}]')
        assert Collection(store, "tasks_e1", Task).all() == []

    def test_remove_only_target(self, store: KeyValueStore):
        collection = Collection(store, "tasks_e1", Task)
        a = collection.append(Task(event_id="e1", title="A"))
        b = collection.append(Task(event_id="e1", title="B"))
        assert collection.remove(a.id) is True
        assert collection.remove(a.id) is False
        assert [t.id for t in Collection(store, "tasks_e1", Task)] == [b.id]

    def test_update_missing_returns_none(self, store: KeyValueStore):
        collection = Collection(store, "tasks_e1", Task)
        assert collection.update("missing", lambda t: None) is None


class TestDocument:
    """Tests for single-record documents."""

    def test_save_and_load(self, store: KeyValueStore):
        document = Document(store, "rsvp_form_e1", RSVPForm)
        form = document.save(RSVPForm(event_id="e1"))
        assert document.load() == form

    def test_corrupted_document_is_absent(self, store: KeyValueStore, caplog):
        store.set("rsvp_form_e1", "garbage")
        assert Document(store, "rsvp_form_e1", RSVPForm).load() is None
        assert "Error loading rsvp_form_e1" in caplog.text

    def test_clear(self, store: KeyValueStore):
        document = Document(store, "rsvp_form_e1", RSVPForm)
        document.save(RSVPForm(event_id="e1"))
        document.clear()
        assert document.load() is None
