import threading

from sitecrawl.services.rate_limiter import RateLimiter


class FakeTime:
    def __init__(self):
        self.now = 100.0
        self.sleeps = []

    def clock(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def test_first_request_to_host_does_not_wait():
    t = FakeTime()
    limiter = RateLimiter(default_delay=1.0, clock=t.clock, sleeper=t.sleep)
    assert limiter.wait('https://example.com/a')
    assert t.sleeps == []


def test_second_request_waits_default_delay():
    t = FakeTime()
    limiter = RateLimiter(default_delay=1.0, clock=t.clock, sleeper=t.sleep)
    limiter.wait('https://example.com/a')
    limiter.wait('https://example.com/b')
    assert t.sleeps == [1.0]


def test_elapsed_time_counts_toward_delay():
    t = FakeTime()
    limiter = RateLimiter(default_delay=1.0, clock=t.clock, sleeper=t.sleep)
    limiter.wait('https://example.com/a')
    t.now += 0.75
    limiter.wait('https://example.com/b')
    assert t.sleeps == [0.25]


def test_hosts_are_paced_independently():
    t = FakeTime()
    limiter = RateLimiter(default_delay=1.0, clock=t.clock, sleeper=t.sleep)
    limiter.wait('https://example.com/a')
    limiter.wait('https://other.com/a')
    assert t.sleeps == []


def test_crawl_delay_stretches_pacing_when_honored():
    t = FakeTime()
    limiter = RateLimiter(default_delay=1.0, clock=t.clock, sleeper=t.sleep)
    limiter.wait('https://example.com/a', crawl_delay=5)
    limiter.wait('https://example.com/b', crawl_delay=5)
    assert t.sleeps == [5.0]


def test_crawl_delay_ignored_when_disabled():
    t = FakeTime()
    limiter = RateLimiter(default_delay=1.0, honor_crawl_delay=False, clock=t.clock, sleeper=t.sleep)
    limiter.wait('https://example.com/a', crawl_delay=5)
    limiter.wait('https://example.com/b', crawl_delay=5)
    assert t.sleeps == [1.0]


def test_per_call_override_of_crawl_delay_honoring():
    limiter = RateLimiter(default_delay=1.0, honor_crawl_delay=True)
    assert limiter.effective_delay(5, honor_crawl_delay=False) == 1.0
    assert limiter.effective_delay(5) == 5.0
    assert limiter.effective_delay(0.5) == 1.0


def test_wait_interrupted_by_stop_event():
    limiter = RateLimiter(default_delay=30.0)
    stop_event = threading.Event()
    limiter.wait('https://example.com/a', stop_event=stop_event)
    stop_event.set()
    assert limiter.wait('https://example.com/b', stop_event=stop_event) is False


def test_reset_forgets_host():
    t = FakeTime()
    limiter = RateLimiter(default_delay=1.0, clock=t.clock, sleeper=t.sleep)
    limiter.wait('https://example.com/a')
    limiter.reset('https://example.com/')
    limiter.wait('https://example.com/b')
    assert t.sleeps == []


def test_wait_longer_than_timeout_gives_up_without_sleeping():
    t = FakeTime()
    limiter = RateLimiter(default_delay=5.0, clock=t.clock, sleeper=t.sleep)
    limiter.wait('https://example.com/a')

    assert limiter.wait('https://example.com/b', timeout=0.5) is False
    assert t.sleeps == []
    # The abandoned wait does not hold the slot
    t.now += 5.0
    assert limiter.wait('https://example.com/c', timeout=0.5) is True
    assert t.sleeps == []


def test_wait_within_timeout_sleeps():
    t = FakeTime()
    limiter = RateLimiter(default_delay=1.0, clock=t.clock, sleeper=t.sleep)
    limiter.wait('https://example.com/a')
    assert limiter.wait('https://example.com/b', timeout=2.0) is True
    assert t.sleeps == [1.0]
