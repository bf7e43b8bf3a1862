import threading

from gui.app.bootstrap import create_app
from gui.services.event_bus import EventBus, GUIEvent


def test_event_bus_service_registration():
    ctx = create_app(headless=True, install_hooks=False)
    bus = ctx.services.get("event_bus")
    assert isinstance(bus, EventBus)
    assert ctx.event_bus is bus


def test_subscribe_publish_basic():
    bus = EventBus()
    received = []

    def handler(evt):
        received.append((evt.name, evt.payload))

    bus.subscribe(GUIEvent.USERS_LOADED, handler)
    bus.publish(GUIEvent.USERS_LOADED, 10)
    assert received == [(GUIEvent.USERS_LOADED.value, 10)]


def test_once_subscription():
    bus = EventBus()
    count = 0

    def incr(_):
        nonlocal count
        count += 1

    bus.subscribe(GUIEvent.FETCH_STARTED, incr, once=True)
    bus.publish(GUIEvent.FETCH_STARTED)
    bus.publish(GUIEvent.FETCH_STARTED)
    assert count == 1
    bus.publish(GUIEvent.FETCH_STARTED)
    assert count == 1


def test_error_isolation():
    bus = EventBus()
    calls = []

    def bad(_):
        raise RuntimeError("handler exploded")

    bus.subscribe(GUIEvent.STATE_CHANGED, bad)
    bus.subscribe(GUIEvent.STATE_CHANGED, lambda evt: calls.append(evt.name))
    bus.publish(GUIEvent.STATE_CHANGED, {})
    assert calls == [GUIEvent.STATE_CHANGED.value]
    assert len(bus.errors) == 1
    assert isinstance(bus.errors[0][1], RuntimeError)


def test_unsubscribe_and_string_names():
    bus = EventBus()
    received = []
    sub = bus.subscribe("custom", lambda evt: received.append(evt.payload))
    bus.publish("custom", 1)
    bus.unsubscribe(sub)
    bus.publish("custom", 2)
    assert received == [1]
    assert not sub.active


def test_handler_errors_from_worker_threads_are_all_recorded():
    bus = EventBus()

    def bad(_):
        raise ValueError("from thread")

    bus.subscribe(GUIEvent.LOG_RECORD_ADDED, bad)
    threads = [
        threading.Thread(target=lambda: [bus.publish(GUIEvent.LOG_RECORD_ADDED) for _ in range(50)])
        for _ in range(4)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(bus.errors) == 200
    bus.clear()
    assert bus.errors == []
