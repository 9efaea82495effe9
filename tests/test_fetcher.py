from unittest.mock import MagicMock, Mock, patch

import pytest
from requests.exceptions import ConnectionError, HTTPError, JSONDecodeError

from pricelist_loader.exceptions import DocumentDecodeError, FetchError
from pricelist_loader.fetcher import Fetcher

URL = "https://pricing.us-east-1.amazonaws.com/offers/v1.0/aws/AmazonEC2/current/region_index.json"


@patch("pricelist_loader.fetcher.get")
def test_fetch_json(mock_get):
    mock_get.return_value.json.return_value = {"regions": {}}
    assert Fetcher(timeout=5).fetch_json(URL) == {"regions": {}}
    mock_get.assert_called_once_with(URL, timeout=5)


@patch("pricelist_loader.fetcher.get")
def test_fetch_json_errors(mock_get):
    mock_get.return_value.json.side_effect = JSONDecodeError("Expecting value", "", 0)
    with pytest.raises(DocumentDecodeError):
        Fetcher().fetch_json(URL)
    mock_get.return_value.raise_for_status.side_effect = HTTPError("404 Not Found")
    with pytest.raises(FetchError):
        Fetcher().fetch_json(URL)
    mock_get.side_effect = ConnectionError("connection refused")
    with pytest.raises(FetchError):
        Fetcher().fetch_json(URL)


def test_fetch():
    session = Mock()
    session.get.return_value.content = b"{}"
    assert Fetcher(session=session).fetch(URL) == b"{}"
    session.get.side_effect = ConnectionError("connection refused")
    with pytest.raises(FetchError):
        Fetcher(session=session).fetch(URL)


def test_download(tmp_path):
    session = MagicMock()
    response = session.get.return_value.__enter__.return_value
    response.iter_content.return_value = [b'{"products"', b": {}}"]
    path = Fetcher(session=session, chunk_size=11).download(URL, tmp_path / "x.json")
    assert path.read_bytes() == b'{"products": {}}'
    assert session.get.call_args.kwargs["stream"] is True
    response.iter_content.assert_called_once_with(chunk_size=11)


def test_download_failure_removes_partial_file(tmp_path):
    def broken_stream(chunk_size):
        yield b'{"products"'
        raise ConnectionError("connection reset")

    session = MagicMock()
    response = session.get.return_value.__enter__.return_value
    response.iter_content.side_effect = broken_stream
    path = tmp_path / "x.json"
    with pytest.raises(FetchError):
        Fetcher(session=session).download(URL, path)
    assert not path.exists()


def test_download_http_error(tmp_path):
    session = MagicMock()
    response = session.get.return_value.__enter__.return_value
    response.raise_for_status.side_effect = HTTPError("503 Service Unavailable")
    path = tmp_path / "x.json"
    with pytest.raises(FetchError):
        Fetcher(session=session).download(URL, path)
    assert not path.exists()
