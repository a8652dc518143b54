from sitecrawl.domain.http_response import HttpResponse
from sitecrawl.exceptions import NetworkError
from sitecrawl.services.robots_fetcher import RobotsFetcher
from sitecrawl.services.robots_service import RobotsService


class DummyHttp:
    def __init__(self, status, text, error=None):
        self.status = status
        self.text = text
        self.error = error
        self.called_urls = []

    def fetch_robots(self, url):
        self.called_urls.append(url)
        if self.error is not None:
            raise self.error
        return HttpResponse(self.status, self.text, 'text/plain')


ROBOTS_TXT = """
User-agent: *
Disallow: /private
Disallow: /tmp/
Disallow:
Crawl-delay: 3
Sitemap: https://example.com/sitemap.xml
sitemap: https://example.com/news.xml
"""


def test_robots_url_derived_from_origin():
    http = DummyHttp(200, '')
    RobotsService(http, user_agent='TestAgent').check_robots_txt('https://example.com:8443/a/b?c=1')
    assert http.called_urls == ['https://example.com:8443/robots.txt']


def test_allows_if_no_robots():
    check = RobotsService(DummyHttp(404, ''), user_agent='TestAgent').check_robots_txt('http://example.com/x')
    assert check.can_crawl
    assert check.disallowed_paths == []
    assert check.sitemap is None
    assert check.crawl_delay is None


def test_fetch_error_fails_open():
    http = DummyHttp(0, '', error=NetworkError('http://example.com/robots.txt', OSError('boom')))
    check = RobotsService(http, user_agent='TestAgent').check_robots_txt('http://example.com/private')
    assert check.can_crawl is True
    assert check.disallowed_paths == []


def test_unexpected_fetch_error_fails_open():
    http = DummyHttp(0, '', error=RuntimeError('unexpected'))
    check = RobotsService(http, user_agent='TestAgent').check_robots_txt('http://example.com/private')
    assert check.can_crawl is True


def test_blocks_disallowed_path():
    svc = RobotsService(DummyHttp(200, ROBOTS_TXT), user_agent='TestAgent')
    assert not svc.check_robots_txt('https://example.com/private/page').can_crawl
    assert svc.check_robots_txt('https://example.com/public').can_crawl


def test_extracts_disallowed_paths_sitemaps_and_delay():
    check = RobotsService(DummyHttp(200, ROBOTS_TXT), user_agent='TestAgent').check_robots_txt('https://example.com/')
    assert check.disallowed_paths == ['/private', '/tmp/']
    assert check.sitemap == ['https://example.com/sitemap.xml', 'https://example.com/news.xml']
    assert check.crawl_delay == 3.0


def test_rules_evaluated_for_configured_user_agent():
    robots_txt = "User-agent: BadBot\nDisallow: /\n\nUser-agent: *\nDisallow:\n"
    assert not RobotsService(DummyHttp(200, robots_txt), user_agent='BadBot/2.0').check_robots_txt('https://example.com/').can_crawl
    assert RobotsService(DummyHttp(200, robots_txt), user_agent='GoodBot/1.0').check_robots_txt('https://example.com/').can_crawl


def test_not_cached_between_calls():
    http = DummyHttp(200, ROBOTS_TXT)
    svc = RobotsService(http, user_agent='TestAgent')
    svc.check_robots_txt('https://example.com/a')
    svc.check_robots_txt('https://example.com/b')
    assert len(http.called_urls) == 2


def test_robots_fetcher_distinguishes_failure_from_missing():
    assert RobotsFetcher(DummyHttp(404, 'ignored')).fetch('https://example.com/robots.txt') == ''
    assert RobotsFetcher(DummyHttp(200, 'User-agent: *')).fetch('https://example.com/robots.txt') == 'User-agent: *'
    failing = DummyHttp(0, '', error=NetworkError('https://example.com/robots.txt', OSError('x')))
    assert RobotsFetcher(failing).fetch('https://example.com/robots.txt') is None
