"""UsersLoadWorker behavior, exercised by calling run() synchronously."""

import httpx

from services.user_fetcher import FetchFailure, fetch_users


def _run(worker):
    results = []
    worker.finished.connect(lambda users, error: results.append((users, error)))
    worker.run()
    return results


def test_worker_emits_users_on_success(qt_app, json_client):
    from gui.workers import UsersLoadWorker

    worker = UsersLoadWorker(fetcher=lambda url: fetch_users(url, client=json_client))
    results = _run(worker)
    assert len(results) == 1
    users, error = results[0]
    assert error == ""
    assert [u.id for u in users] == [3, 1, 2]


def test_worker_reports_fetch_failure(qt_app, client_factory):
    from gui.workers import UsersLoadWorker

    client = client_factory(lambda request: httpx.Response(502))
    worker = UsersLoadWorker(fetcher=lambda url: fetch_users(url, client=client))
    results = _run(worker)
    assert results[0][0] == []
    assert "502" in results[0][1]


def test_worker_never_raises(qt_app):
    from gui.workers import UsersLoadWorker

    def exploding(url):
        raise KeyError("unexpected")

    results = _run(UsersLoadWorker(fetcher=exploding))
    assert results[0][0] == []
    assert results[0][1].startswith("Unexpected error")


def test_worker_uses_configured_url(qt_app):
    from config import settings
    from gui.workers import UsersLoadWorker

    seen = []

    def fetcher(url):
        seen.append(url)
        raise FetchFailure("offline")

    results = _run(UsersLoadWorker(fetcher=fetcher))
    assert seen == [settings.USERS_URL]
    assert results == [([], "offline")]


def test_worker_thread_round_trip(qt_app, json_client):
    from PyQt6.QtCore import QEventLoop, QTimer
    from gui.workers import UsersLoadWorker

    worker = UsersLoadWorker(fetcher=lambda url: fetch_users(url, client=json_client))
    results = []
    loop = QEventLoop()

    def done(users, error):
        results.append((users, error))
        loop.quit()

    worker.finished.connect(done)
    worker.start()
    QTimer.singleShot(5000, loop.quit)
    loop.exec()
    worker.wait(2000)
    assert results and results[0][1] == ""
