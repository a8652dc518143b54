import logging
from unittest.mock import Mock

from sitecrawl.services.summary_service import SummaryService


def test_no_summarizer_returns_none():
    assert SummaryService().summarize('content', 'title') is None


def test_summarizer_receives_content_and_title():
    summarizer = Mock(return_value='short')
    assert SummaryService(summarizer).summarize('long content', 'A Title') == 'short'
    summarizer.assert_called_once_with('long content', 'A Title')


def test_summarizer_failure_is_swallowed(caplog):
    summarizer = Mock(side_effect=RuntimeError('model offline'))
    caplog.set_level(logging.ERROR)
    assert SummaryService(summarizer).summarize('content', 'title') == ''
    assert 'Summary generation failed' in caplog.text
