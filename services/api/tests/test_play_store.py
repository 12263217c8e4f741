"""Unit tests for `PlayStore` fault translation, using in-memory table doubles."""

from datetime import datetime, timezone

import pytest

from playbook.errors import InternalFault, NotFoundFault, ValidationFault
from playbook.play_store import PlayStore, format_created_at, format_exported_at
from playbook.schemas import PlayerState, Position
from playbook.store import StoreError

FIXED_NOW = datetime(2024, 5, 1, 18, 30, 0, 123456, tzinfo=timezone.utc)


class MemoryTable:
    """Dict-backed stand-in for `PlayTable`."""

    def __init__(self):
        self.items = {}

    def put_item(self, item):
        self.items[item["id"]] = item

    def get_item(self, key):
        return self.items.get(key)

    def scan(self, limit=None, offset=0):
        items = list(self.items.values())
        if limit is not None or offset:
            items = sorted(items, key=lambda i: i["id"])[offset:]
            if limit is not None:
                items = items[:limit]
        return items

    def delete_item(self, key):
        self.items.pop(key, None)


class BrokenTable:
    def put_item(self, item):
        raise StoreError("down")

    def get_item(self, key):
        raise StoreError("down")

    def scan(self, limit=None, offset=0):
        raise StoreError("down")

    def delete_item(self, key):
        raise StoreError("down")


@pytest.fixture
def table():
    return MemoryTable()


@pytest.fixture
def store(table):
    return PlayStore(table, clock=lambda: FIXED_NOW)


def _state(player_id="p1") -> PlayerState:
    return PlayerState(player_id=player_id, position=Position(x=1.0, y=2.0), timestamp=1000)


def test_create_writes_one_item_with_wire_names(store, table) -> None:
    play = store.create_play("Pick and Roll", [_state()])

    assert play.created_at == "2024-05-01T18:30:00Z"
    assert table.items[play.id] == {
        "id": play.id,
        "name": "Pick and Roll",
        "createdAt": "2024-05-01T18:30:00Z",
        "playerStates": [{"playerId": "p1", "position": {"x": 1.0, "y": 2.0}, "timestamp": 1000}],
    }


def test_get_returns_stored_play(store) -> None:
    play = store.create_play("Sweep", [_state("a"), _state("b")])

    assert store.get_play(play.id) == play


def test_get_missing_is_not_found(store) -> None:
    with pytest.raises(NotFoundFault):
        store.get_play("missing")


def test_undecodable_record_is_internal_fault_for_get_and_list(store, table) -> None:
    table.items["bad"] = {"id": "bad", "name": "bad", "createdAt": "x", "playerStates": "oops"}

    with pytest.raises(InternalFault):
        store.get_play("bad")
    with pytest.raises(InternalFault):
        store.list_plays()


def test_list_is_all_or_nothing(store, table) -> None:
    store.create_play("good", [])
    table.items["bad"] = {"id": "bad"}

    with pytest.raises(InternalFault, match="deserialize"):
        store.list_plays()


def test_delete_missing_is_silent(store) -> None:
    store.delete_play("never-existed")


@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.create_play("x", []),
        lambda s: s.list_plays(),
        lambda s: s.get_play("x"),
        lambda s: s.delete_play("x"),
    ],
)
def test_store_failures_become_internal_faults(call) -> None:
    store = PlayStore(BrokenTable())

    with pytest.raises(InternalFault) as excinfo:
        call(store)

    assert excinfo.value.status_code == 500


def test_export_stamps_metadata(store) -> None:
    store.create_play("one", [])
    store.create_play("two", [])

    bundle = store.export_plays(app_name="Playbook")

    assert bundle.version == "1.0"
    assert bundle.exported_at == "2024-05-01T18:30:00.123Z"
    assert bundle.metadata.total_plays == 2
    assert {p.name for p in bundle.plays} == {"one", "two"}


def test_import_requires_entries(store) -> None:
    with pytest.raises(ValidationFault):
        store.import_plays([])


def test_import_keeps_valid_samples_and_drops_the_rest(store, table) -> None:
    good = {"playerId": "p1", "position": {"x": 1.0, "y": 2.0}, "timestamp": 1000}
    result = store.import_plays([
        {
            "name": "mixed",
            "playerStates": [
                good,
                {"playerId": "p2", "position": {"x": 3.0}, "timestamp": 1100},
                {"playerId": "p3", "position": {"x": 1.0, "y": 1.0}, "timestamp": "1200"},
                "not a sample",
            ],
        },
    ])

    assert result.success == 1
    assert result.errors == []
    (stored,) = table.items.values()
    assert stored["name"] == "mixed"
    assert stored["playerStates"] == [good]


@pytest.mark.parametrize(
    "entry, message",
    [
        ({"name": "", "playerStates": []}, "Missing or invalid name"),
        ({"name": 7, "playerStates": []}, "Missing or invalid name"),
        ("not a play", "Missing or invalid name"),
        ({"name": "no states"}, "Missing or invalid player states"),
        ({"name": "empty", "playerStates": []}, "No valid player states found"),
        ({"name": "zero time", "playerStates": [{"playerId": "p1", "position": {"x": 0, "y": 0}, "timestamp": 0}]},
         "No valid player states found"),
    ],
)
def test_import_reports_unusable_entries(store, table, entry, message) -> None:
    result = store.import_plays([{"name": "ok", "playerStates": [_state().model_dump(by_alias=True)]}, entry])

    assert result.success == 1
    assert result.errors == [f"Play 2: {message}"]
    assert len(table.items) == 1


def test_timestamp_formats() -> None:
    moment = datetime(2023, 1, 2, 3, 4, 5, 6000, tzinfo=timezone.utc)

    assert format_created_at(moment) == "2023-01-02T03:04:05Z"
    assert format_exported_at(moment) == "2023-01-02T03:04:05.006Z"
