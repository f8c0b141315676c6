import threading

from chromaworks.apps.live_scan.core.session import ScanSession
from chromaworks.apps.live_scan.core.worker import ScanWorker


def test_worker_drains_frames_and_publishes(solid_view):
    frames = [solid_view((40, level, 40)) for level in (235, 235, 180, 180, 195)]
    session = ScanSession(update_interval=0)
    worker = ScanWorker(session, frames)

    worker.start()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert worker.stopped
    assert worker.error is None
    assert worker.frames_processed == 5
    assert session.latest.color_name == "Light Vivid Green"
    assert session.sink.version == 5


def test_worker_honours_max_frames(solid_view):
    frames = [solid_view((10, 10, 10))] * 10
    session = ScanSession(update_interval=0)
    worker = ScanWorker(session, frames, max_frames=3)

    worker.start()
    worker.join(timeout=5)

    assert worker.frames_processed == 3
    assert session.frames_seen == 3


def test_worker_stops_on_request(solid_view):
    gate = threading.Event()
    view = solid_view((200, 200, 200))

    def endless():
        while True:
            gate.set()
            yield view

    session = ScanSession(update_interval=0)
    worker = ScanWorker(session, endless())
    worker.start()
    assert gate.wait(timeout=5)
    worker.stop()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert worker.error is None
    assert session.latest.color_name == "Light Gray"


def test_worker_records_source_errors(solid_view):
    view = solid_view((0, 0, 0))

    def failing():
        yield view
        raise RuntimeError("camera unplugged")

    session = ScanSession(update_interval=0)
    worker = ScanWorker(session, failing())
    worker.start()
    worker.join(timeout=5)

    assert isinstance(worker.error, RuntimeError)
    assert worker.frames_processed == 1
    assert session.latest.color_name == "Black"


def test_worker_uses_custom_center(solid_view):
    view = solid_view((0, 0, 255), width=20, height=20)
    session = ScanSession(update_interval=0)
    worker = ScanWorker(session, [view, view], center=(500, 500))
    worker.start()
    worker.join(timeout=5)

    assert session.frames_skipped == 2
    assert session.latest is None
