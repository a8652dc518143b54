from sitecrawl.domain.crawl_history import CrawlHistory
from sitecrawl.services.crawl_history_log import CrawlHistoryLog


def test_recent_returns_newest_first():
    log = CrawlHistoryLog()
    log.record(CrawlHistory(url='https://example.com/1', crawled_at=1))
    log.record(CrawlHistory(url='https://example.com/2', crawled_at=2))
    assert [h.crawled_at for h in log.recent()] == [2, 1]


def test_bounded_to_max_size_dropping_oldest():
    log = CrawlHistoryLog(max_size=100)
    for i in range(101):
        log.record(CrawlHistory(url=f'https://example.com/{i}', crawled_at=i))
    entries = log.recent(200)
    assert len(entries) == 100
    assert entries[0].crawled_at == 100
    assert entries[-1].crawled_at == 1


def test_recent_limit():
    log = CrawlHistoryLog()
    for i in range(10):
        log.record(CrawlHistory(url='https://example.com', crawled_at=i))
    assert len(log.recent(3)) == 3
    assert len(log.recent()) == 10


def test_clear():
    log = CrawlHistoryLog()
    log.record(CrawlHistory(url='https://example.com', crawled_at=1))
    log.clear()
    assert log.recent() == []
