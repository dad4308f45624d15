import pytest

from ev_dash.errors import TripStoreError
from ev_dash.services.trip_session import TripSessionManager
from ev_dash.services.trip_store import MemoryTripFlagStore, TripFlagStore


class BrokenStore(TripFlagStore):
    """Storage that is never available."""

    def load(self) -> bool:
        raise TripStoreError("disk gone")

    def save(self, value: bool) -> None:
        raise TripStoreError("disk gone")


@pytest.fixture
def make_manager(snapshot, fixed_clock):
    def factory(store):
        return TripSessionManager(snapshot, store, clock=fixed_clock)

    return factory


def test_absent_flag_starts_fresh(make_manager, memory_store, snapshot):
    session = make_manager(memory_store).initialize()

    assert session.show_prompt is False
    assert session.continue_trip is False
    assert snapshot.distance == 0
    assert snapshot.started == "-"
    assert snapshot.duration == "-"
    assert snapshot.eta == "-"
    assert snapshot.show_prompt is False


def test_saved_trip_shows_prompt(make_manager, saved_trip_store, snapshot):
    session = make_manager(saved_trip_store).initialize()

    assert session.show_prompt is True
    assert session.continue_trip is True
    assert session.trip_in_progress is True
    assert snapshot.distance == 98.1
    assert snapshot.started == "1:22 PM"
    assert snapshot.duration == "1h 23m"
    assert snapshot.eta == "2:45 PM"
    assert snapshot.show_prompt is True


def test_false_flag_starts_fresh(make_manager, snapshot):
    store = MemoryTripFlagStore({"tripInProgress": "false"})
    session = make_manager(store).initialize()

    assert session.show_prompt is False
    assert snapshot.distance == 0


def test_resume_clears_prompt_and_persists(make_manager, saved_trip_store, snapshot, recorder):
    manager = make_manager(saved_trip_store)
    manager.initialize()
    prompts = recorder(manager.prompt_changed)

    manager.resume()

    assert manager.session.continue_trip is True
    assert manager.session.show_prompt is False
    assert snapshot.show_prompt is False
    assert snapshot.distance == 98.1
    assert saved_trip_store.values["tripInProgress"] == "true"
    assert prompts.calls == [(False,)]


@pytest.mark.parametrize("saved", [True, False])
def test_start_new_always_resets_trip_fields(make_manager, snapshot, saved):
    store = MemoryTripFlagStore()
    store.save(saved)
    manager = make_manager(store)
    manager.initialize()
    snapshot.distance = 12.5
    snapshot.duration = "0h 10m"

    manager.start_new()

    assert manager.session.continue_trip is False
    assert manager.session.show_prompt is False
    assert snapshot.distance == 0
    assert snapshot.started == "13:22"
    assert snapshot.duration == "-"
    assert snapshot.eta == "-"
    assert store.values["tripInProgress"] == "false"


def test_unreadable_storage_means_new_trip(make_manager, snapshot):
    session = make_manager(BrokenStore()).initialize()

    assert session.show_prompt is False
    assert session.continue_trip is False
    assert snapshot.distance == 0


def test_unwritable_storage_does_not_block_decisions(make_manager, snapshot):
    manager = make_manager(BrokenStore())
    manager.initialize()

    manager.resume()
    assert manager.session.continue_trip is True

    manager.start_new()
    assert manager.session.continue_trip is False
    assert snapshot.started == "13:22"


def test_session_changed_emitted_for_each_decision(make_manager, memory_store, recorder):
    manager = make_manager(memory_store)
    changes = recorder(manager.session_changed)

    manager.initialize()
    manager.resume()
    manager.start_new()

    assert changes.count == 3
