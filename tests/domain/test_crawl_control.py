import threading

from sitecrawl.domain.crawl_control import CrawlControl


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_fresh_control_does_not_stop():
    control = CrawlControl()
    assert not control.should_stop()
    assert control.remaining() is None


def test_cancel_sets_shared_event():
    event = threading.Event()
    control = CrawlControl(stop_event=event)
    control.cancel()
    assert event.is_set()
    assert control.is_cancelled()
    assert control.should_stop()


def test_deadline_expires_with_clock():
    clock = FakeClock()
    control = CrawlControl(timeout_seconds=5, clock=clock)
    assert control.remaining() == 5
    assert not control.is_expired()

    clock.now += 5
    assert control.is_expired()
    assert control.should_stop()
    assert control.remaining() == 0.0
