# Shared fixtures: headless Qt, a fallback 'qtbot' fixture when pytest-qt is
# not installed, and sample /users payloads served through httpx.MockTransport.

import contextlib
import copy
import os
import sys

import httpx
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

SAMPLE_USERS = [
    {
        "id": 3,
        "name": "Clementine Bauch",
        "username": "Samantha",
        "email": "Nathan@yesenia.net",
        "address": {
            "street": "Douglas Extension",
            "suite": "Suite 847",
            "city": "McKenziehaven",
            "zipcode": "59590-4157",
            "geo": {"lat": "-68.6102", "lng": "-47.0653"},
        },
        "phone": "1-463-123-4447",
        "website": "ramiro.info",
        "company": {"name": "Romaguera-Jacobson", "catchPhrase": "", "bs": ""},
    },
    {
        "id": 1,
        "name": "Leanne Graham",
        "username": "Bret",
        "email": "Sincere@april.biz",
        "address": {"city": "Gwenborough", "zipcode": "92998-3874"},
        "phone": "1-770-736-8031 x56442",
        "website": "hildegard.org",
        "company": {"name": "Romaguera-Crona"},
    },
    {
        "id": 2,
        "name": "Ervin Howell",
        "username": "Antonette",
        "email": "Shanna@melissa.tv",
        "address": {"city": "Wisokyburgh", "zipcode": "90566-7771"},
        "phone": "010-692-6593 x09125",
        "website": "anastasia.net",
        "company": {"name": "Deckow-Crist"},
    },
]


@pytest.fixture
def client_factory():
    """Build httpx clients over MockTransport; closed at teardown."""
    clients = []

    def _make(handler) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def users_payload():
    return copy.deepcopy(SAMPLE_USERS)


@pytest.fixture
def recorded_requests():
    return []


@pytest.fixture
def json_client(client_factory, users_payload, recorded_requests):
    """Client whose every GET answers 200 with the sample payload."""

    def handler(request: httpx.Request) -> httpx.Response:
        recorded_requests.append(request)
        return httpx.Response(200, json=users_payload)

    return client_factory(handler)


@pytest.fixture
def qt_app():
    from PyQt6.QtWidgets import QApplication

    return QApplication.instance() or QApplication(sys.argv)


try:  # If pytest-qt present, its qtbot fixture is used
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover

    @pytest.fixture
    def qtbot(qt_app):  # type: ignore
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

            @contextlib.contextmanager
            def waitSignal(self, *args, **kwargs):  # no-op stub
                yield

        return Bot()
