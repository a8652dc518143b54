from sitecrawl.services.http_service import HttpService
from sitecrawl.exceptions import ContentTooLarge, NetworkError
from unittest.mock import Mock
import pytest
import requests


def _response(status=200, text='hello world', headers=None, url='http://example.com', reason='OK'):
    resp = Mock()
    resp.status_code = status
    resp.text = text
    resp.headers = headers if headers is not None else {}
    resp.url = url
    resp.reason = reason
    return resp


def test_fetch_success():
    mock_http_client = Mock(return_value=_response())
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    response = http.fetch('http://example.com')
    assert response.status_code == 200
    assert response.text == 'hello world'
    assert response.ok


def test_fetch_sends_browser_like_headers_and_follows_redirects():
    mock_http_client = Mock(return_value=_response())
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client, timeout=7)
    http.fetch('http://example.com')

    _, kwargs = mock_http_client.call_args
    assert kwargs['headers']['User-Agent'] == 'TestAgent'
    assert 'text/html' in kwargs['headers']['Accept']
    assert kwargs['headers']['Accept-Language'].startswith('en-US')
    assert kwargs['allow_redirects'] is True
    assert kwargs['timeout'] == 7


def test_fetch_user_agent_override():
    mock_http_client = Mock(return_value=_response())
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    http.fetch('http://example.com', user_agent='Other/2.0')
    assert mock_http_client.call_args[1]['headers']['User-Agent'] == 'Other/2.0'


def test_fetch_robots_success():
    mock_http_client = Mock(return_value=_response(text='User-agent: *\nDisallow: /private'))
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    response = http.fetch_robots('http://example.com/robots.txt')
    assert response.status_code == 200
    assert 'Disallow' in response.text


def test_fetch_wraps_requests_exception():
    mock_http_client = Mock(side_effect=requests.exceptions.Timeout("timed out"))
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(NetworkError) as excinfo:
        http.fetch('http://example.com')
    assert "http://example.com" in str(excinfo.value)
    assert excinfo.value.code == "NETWORK_ERROR"


def test_fetch_content_type_and_length_from_headers():
    headers = {'Content-Type': 'text/html; charset=utf-8', 'Content-Length': '18'}
    mock_http_client = Mock(return_value=_response(text='<html>test</html>', headers=headers))
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    response = http.fetch('http://example.com')
    assert response.content_type == 'text/html; charset=utf-8'
    assert response.content_length == 18


def test_fetch_missing_content_type():
    mock_http_client = Mock(return_value=_response(text='data', headers={}))
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    response = http.fetch('http://example.com')
    assert response.content_type is None
    assert response.content_length is None


def test_fetch_bubbles_unexpected_exceptions():
    """Non-requests exceptions from headers.get() are NOT swallowed."""
    mock_response = _response()
    mock_response.headers = Mock()
    mock_response.headers.get.side_effect = RuntimeError("Real bug in headers.get()")
    http = HttpService(user_agent='TestAgent', http_client=Mock(return_value=mock_response))
    with pytest.raises(RuntimeError):
        http.fetch('http://example.com')


def _streamed(chunks, headers=None, encoding='utf-8'):
    resp = _response(headers=headers if headers is not None else {'Content-Type': 'text/html'})
    resp.iter_content.return_value = iter(chunks)
    resp.encoding = encoding
    return resp


def test_fetch_with_byte_limit_streams_body():
    resp = _streamed([b'<html>', 'café</html>'.encode('utf-8')])
    mock_http_client = Mock(return_value=resp)
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    response = http.fetch('http://example.com', max_bytes=1024)

    assert mock_http_client.call_args[1]['stream'] is True
    assert response.text == '<html>café</html>'
    resp.close.assert_called_once_with()


def test_fetch_without_byte_limit_does_not_stream():
    mock_http_client = Mock(return_value=_response())
    HttpService(user_agent='TestAgent', http_client=mock_http_client).fetch('http://example.com')
    assert 'stream' not in mock_http_client.call_args[1]


def test_declared_length_over_limit_stops_before_reading():
    resp = _streamed([b'x' * 10], headers={'Content-Type': 'text/html', 'Content-Length': '5000'})
    http = HttpService(user_agent='TestAgent', http_client=Mock(return_value=resp))

    with pytest.raises(ContentTooLarge) as excinfo:
        http.fetch('http://example.com/big', max_bytes=100)

    assert excinfo.value.size == 5000
    assert not resp.iter_content.called
    resp.close.assert_called_once_with()


def test_streamed_body_over_limit_stops_reading():
    consumed = []

    def chunks():
        for i in range(10):
            consumed.append(i)
            yield b'x' * 60

    resp = _streamed(chunks())
    http = HttpService(user_agent='TestAgent', http_client=Mock(return_value=resp))

    with pytest.raises(ContentTooLarge) as excinfo:
        http.fetch('http://example.com/big', max_bytes=100)

    assert excinfo.value.size == 120
    assert consumed == [0, 1]
    resp.close.assert_called_once_with()


def test_byte_limit_counts_bytes_not_characters():
    # 40 characters, 120 bytes in UTF-8
    resp = _streamed(['€'.encode('utf-8') * 40])
    http = HttpService(user_agent='TestAgent', http_client=Mock(return_value=resp))
    with pytest.raises(ContentTooLarge):
        http.fetch('http://example.com/euro', max_bytes=100)


def test_stream_interrupted_is_network_error():
    resp = _response(headers={'Content-Type': 'text/html'})
    resp.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("broken")
    http = HttpService(user_agent='TestAgent', http_client=Mock(return_value=resp))
    with pytest.raises(NetworkError):
        http.fetch('http://example.com', max_bytes=100)
