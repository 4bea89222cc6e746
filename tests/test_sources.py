import asyncio

import httpx
import pytest
from tenacity import wait_none

from auction_board.config.settings import AppSettings
from auction_board.models.enums import SourceKind
from auction_board.sources.base_source import FetchError, NotFoundError
from auction_board.sources.factory import build_source, detect_source_kind
from auction_board.sources.http_source import HttpCsvSource, join_location
from auction_board.sources.local_source import LocalCsvSource

BASE_URL = "https://raw.example.com/auction/data"
CSV_TEXT = "Name,Bid\nAlice,50000\n"


def _fetch(source, team_name):
    async def scenario():
        async with source:
            return await source.fetch_team_csv(team_name)

    return asyncio.run(scenario())


def _http_source(handler, max_attempts=1, timeout_seconds=30.0):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpCsvSource(
        BASE_URL,
        timeout_seconds=timeout_seconds,
        max_attempts=max_attempts,
        client=client,
        retry_wait=wait_none(),
    )


def test_join_location_percent_encodes_team_name():
    assert join_location(BASE_URL, "Malnad Bulls") == f"{BASE_URL}/Malnad%20Bulls.csv"
    assert join_location(BASE_URL + "/", "SDP GC") == f"{BASE_URL}/SDP%20GC.csv"
    assert join_location(BASE_URL, "Friends/XI") == f"{BASE_URL}/Friends%2FXI.csv"


def test_http_source_returns_csv_text():
    requested = []

    def handler(request):
        requested.append(str(request.url))
        return httpx.Response(200, text=CSV_TEXT)

    assert _fetch(_http_source(handler), "Friends XI") == CSV_TEXT
    assert requested == [f"{BASE_URL}/Friends%20XI.csv"]


def test_http_source_strips_utf8_bom():
    def handler(request):
        return httpx.Response(200, content="\ufeffName,Bid\n".encode("utf-8"))

    assert _fetch(_http_source(handler), "UCCB") == "Name,Bid\n"


def test_http_source_404_is_not_found():
    def handler(request):
        return httpx.Response(404)

    with pytest.raises(NotFoundError):
        _fetch(_http_source(handler), "UCCB")


@pytest.mark.parametrize("status", [403, 500, 503])
def test_http_source_non_success_is_fetch_error(status):
    def handler(request):
        return httpx.Response(status)

    with pytest.raises(FetchError):
        _fetch(_http_source(handler), "UCCB")


def test_http_source_network_error_is_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError):
        _fetch(_http_source(handler), "UCCB")


def test_http_source_no_retry_by_default():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503)

    with pytest.raises(FetchError):
        _fetch(_http_source(handler), "UCCB")
    assert len(calls) == 1


def test_http_source_retries_transient_status_when_enabled():
    responses = iter([httpx.Response(503), httpx.Response(200, text=CSV_TEXT)])

    def handler(request):
        return next(responses)

    assert _fetch(_http_source(handler, max_attempts=2), "UCCB") == CSV_TEXT


def test_http_source_does_not_retry_not_found():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(404)

    with pytest.raises(NotFoundError):
        _fetch(_http_source(handler, max_attempts=3), "UCCB")
    assert len(calls) == 1


def test_local_source_reads_team_file(tmp_path):
    (tmp_path / "Friends XI.csv").write_text(CSV_TEXT, encoding="utf-8")
    source = LocalCsvSource(str(tmp_path))

    assert source.location_for("Friends XI") == str(tmp_path / "Friends XI.csv")
    assert _fetch(source, "Friends XI") == CSV_TEXT


def test_local_source_missing_file_is_not_found(tmp_path):
    with pytest.raises(NotFoundError):
        _fetch(LocalCsvSource(str(tmp_path)), "Nobody")


@pytest.mark.parametrize(
    "location, expected",
    [
        ("https://raw.githubusercontent.com/org/repo/main/data/", SourceKind.HTTP),
        ("HTTP://example.com/data", SourceKind.HTTP),
        ("excel_data/", SourceKind.LOCAL),
        ("/srv/auction", SourceKind.LOCAL),
    ],
)
def test_detect_source_kind(location, expected):
    assert detect_source_kind(location) == expected


def test_build_source_uses_settings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    local = build_source(AppSettings(data_base_url="excel_data/"))
    assert isinstance(local, LocalCsvSource)

    remote = build_source(AppSettings(data_base_url=BASE_URL, fetch_max_attempts=3))
    assert isinstance(remote, HttpCsvSource)
    assert remote.max_attempts == 3
    asyncio.run(remote.close())


def test_http_source_read_timeout_is_fetch_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(FetchError):
        _fetch(_http_source(handler), "UCCB")


def test_http_source_slow_response_hits_overall_deadline():
    async def handler(request):
        await asyncio.sleep(5)
        return httpx.Response(200, text=CSV_TEXT)

    with pytest.raises(FetchError, match="Timed out"):
        _fetch(_http_source(handler, timeout_seconds=0.1), "UCCB")


def test_http_source_gives_up_after_max_attempts():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503)

    with pytest.raises(FetchError, match="after 2 attempts"):
        _fetch(_http_source(handler, max_attempts=2), "UCCB")
    assert len(calls) == 2
