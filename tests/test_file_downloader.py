import pytest
import requests

from diary.services.clients import file_downloader
from diary.services.clients.file_downloader import download_schedule_file, DownloadError


class FakeResponse:
    def __init__(self, content=b'', status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f'{self.status_code} Error')


def test_download_returns_content(monkeypatch):
    calls = {}

    def fake_get(url, timeout):
        calls['args'] = (url, timeout)
        return FakeResponse(b'xlsx-bytes')

    monkeypatch.setattr(file_downloader.requests, 'get', fake_get)
    assert download_schedule_file('https://example.org/r.xlsx', timeout=5) == b'xlsx-bytes'
    assert calls['args'] == ('https://example.org/r.xlsx', 5)


def test_http_error_raises_download_error(monkeypatch):
    monkeypatch.setattr(file_downloader.requests, 'get', lambda url, timeout: FakeResponse(status_code=404))
    with pytest.raises(DownloadError):
        download_schedule_file('https://example.org/missing.xlsx')


def test_connection_error_raises_download_error(monkeypatch):
    def fail(url, timeout):
        raise requests.exceptions.ConnectionError('refused')

    monkeypatch.setattr(file_downloader.requests, 'get', fail)
    with pytest.raises(DownloadError):
        download_schedule_file('https://example.org/r.xlsx')


def test_empty_body_raises_download_error(monkeypatch):
    monkeypatch.setattr(file_downloader.requests, 'get', lambda url, timeout: FakeResponse(b''))
    with pytest.raises(DownloadError):
        download_schedule_file('https://example.org/r.xlsx')
