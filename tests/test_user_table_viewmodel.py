from domain.models import Address, Company, UserRecord
from gui.services.event_bus import EventBus, GUIEvent
from gui.services.sorting import SortConfig, SortDirection, SortField
from gui.viewmodels.user_table_viewmodel import (
    DisplayState,
    RowKind,
    TableSnapshot,
    UserTableViewModel,
)


def _user(uid, name, company="Acme"):
    return UserRecord(
        id=uid,
        name=name,
        username=name.lower(),
        email=f"{name.lower()}@example.com",
        phone="555-0100",
        website=f"{name.lower()}.example",
        address=Address("Springfield", "12345"),
        company=Company(company),
    )


USERS = [_user(3, "Carol", "Beta"), _user(1, "alice", "Gamma"), _user(2, "Bob", "Alpha")]


def _collect(bus, event):
    received = []
    bus.subscribe(event, lambda evt: received.append(evt.payload))
    return received


def test_starts_loading_with_placeholder_rows():
    vm = UserTableViewModel()
    assert vm.display_state is DisplayState.LOADING
    rows = vm.rows()
    assert len(rows) == 5
    assert all(r.kind is RowKind.PLACEHOLDER for r in rows)
    assert vm.sort_config == SortConfig()


def test_loaded_rows_follow_arrival_order_until_sorted():
    vm = UserTableViewModel()
    vm.set_users(USERS)
    assert vm.display_state is DisplayState.LOADED
    assert [r.user.id for r in vm.rows()] == [3, 1, 2]
    vm.activate_sort(SortField.ID)
    assert [r.user.id for r in vm.rows()] == [1, 2, 3]
    vm.activate_sort(SortField.ID)
    assert [r.user.id for r in vm.rows()] == [3, 2, 1]
    # fetched collection keeps arrival order
    assert [u.id for u in vm.users()] == [3, 1, 2]


def test_stripes_are_computed_after_sorting():
    vm = UserTableViewModel()
    vm.set_users(USERS)
    vm.activate_sort(SortField.NAME)
    rows = vm.rows()
    assert [r.user.name for r in rows] == ["alice", "Bob", "Carol"]
    assert [r.stripe for r in rows] == ["even", "odd", "even"]
    assert [r.index for r in rows] == [0, 1, 2]


def test_empty_collection_renders_single_empty_row_regardless_of_sort():
    vm = UserTableViewModel()
    vm.set_users([])
    assert vm.display_state is DisplayState.EMPTY
    for sort_field in (SortField.ID, SortField.NAME, SortField.NAME, SortField.COMPANY):
        vm.activate_sort(sort_field)
        rows = vm.rows()
        assert len(rows) == 1
        assert rows[0].kind is RowKind.EMPTY
        assert vm.snapshot().data_rows == []


def test_failure_clears_collection_and_loading():
    vm = UserTableViewModel()
    vm.set_failed("boom")
    assert vm.display_state is DisplayState.FAILED
    assert vm.failure == "boom"
    assert vm.users() == []
    snap = vm.snapshot()
    assert not snap.is_loading
    assert [r.kind for r in snap.rows] == [RowKind.EMPTY]


def test_sorting_while_loading_only_updates_config():
    vm = UserTableViewModel()
    cfg = vm.activate_sort(SortField.COMPANY)
    assert cfg == SortConfig(SortField.COMPANY, SortDirection.ASC)
    assert all(r.kind is RowKind.PLACEHOLDER for r in vm.rows())
    vm.set_users(USERS)
    assert [r.user.company.name for r in vm.rows()] == ["Alpha", "Beta", "Gamma"]


def test_switching_key_resets_direction():
    vm = UserTableViewModel()
    vm.set_users(USERS)
    vm.activate_sort(SortField.NAME)
    vm.activate_sort(SortField.NAME)
    assert vm.sort_config.direction is SortDirection.DESC
    vm.activate_sort(SortField.ID)
    assert vm.sort_config == SortConfig(SortField.ID, SortDirection.ASC)


def test_every_mutation_publishes_snapshot():
    bus = EventBus()
    states = _collect(bus, GUIEvent.STATE_CHANGED)
    loaded = _collect(bus, GUIEvent.USERS_LOADED)
    sorts = _collect(bus, GUIEvent.SORT_CHANGED)
    vm = UserTableViewModel(bus)
    vm.begin_loading()
    vm.set_users(USERS)
    vm.activate_sort(SortField.ID)
    assert [s.display_state for s in states] == [
        DisplayState.LOADING,
        DisplayState.LOADED,
        DisplayState.LOADED,
    ]
    assert all(isinstance(s, TableSnapshot) for s in states)
    assert loaded == [3]
    assert sorts == [SortConfig(SortField.ID, SortDirection.ASC)]


def test_failure_publishes_fetch_failed():
    bus = EventBus()
    failures = _collect(bus, GUIEvent.FETCH_FAILED)
    UserTableViewModel(bus).set_failed("offline")
    assert failures == ["offline"]


def test_placeholder_row_count_is_configurable():
    vm = UserTableViewModel(placeholder_rows=3)
    assert len(vm.rows()) == 3
