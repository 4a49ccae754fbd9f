"""Tests for the CMS snapshot step."""

import json

import httpx
import pytest

from conftest import RecordingTransport, json_response
from movielog.config import Settings, resolve_contentful
from movielog.models.movie import MovieRecord, MovieSource, Snapshot
from movielog.services.contentful import CONTENTFUL_BASE_URL, ContentfulService
from movielog.snapshot import read_snapshot, refresh_snapshot, write_snapshot


EMPTY_SNAPSHOT = '{\n  "movies": []\n}'


def make_service(transport: httpx.MockTransport) -> ContentfulService:
    return ContentfulService(
        space_id="space123",
        access_token="token456",
        client=httpx.AsyncClient(base_url=CONTENTFUL_BASE_URL, transport=transport),
    )


class TestRefreshSnapshot:
    """Tests for refresh_snapshot."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("space_id,token", [("", ""), (None, None), ("space", ""), (None, "tok")])
    async def test_missing_credentials_skip_request(self, tmp_path, monkeypatch, space_id, token):
        """Test that empty credentials write an empty snapshot without a request."""
        calls = []

        async def _get_movies(self):
            calls.append(self)
            return []

        monkeypatch.setattr(ContentfulService, "get_movies", _get_movies)
        settings = Settings(contentful_space_id=space_id, contentful_access_token=token)
        path = tmp_path / "_data" / "cmsData.json"

        snapshot = await refresh_snapshot(resolve_contentful(settings), path)

        assert calls == []
        assert snapshot == Snapshot.empty()
        assert path.read_text(encoding="utf-8") == EMPTY_SNAPSHOT

    @pytest.mark.asyncio
    async def test_server_error_writes_empty_snapshot(self, tmp_path, log_messages):
        """Test that HTTP 500 is logged and degrades to an empty snapshot."""
        path = tmp_path / "cmsData.json"
        path.write_text(json.dumps({"movies": [{"id": "stale"}]}), encoding="utf-8")
        transport = RecordingTransport(lambda req: httpx.Response(500))

        snapshot = await refresh_snapshot(make_service(transport), path)

        assert snapshot.movies == []
        assert path.read_text(encoding="utf-8") == EMPTY_SNAPSHOT
        assert any("500" in m and m.startswith("ERROR") for m in log_messages)

    @pytest.mark.asyncio
    async def test_network_failure_writes_empty_snapshot(self, tmp_path):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        path = tmp_path / "cmsData.json"
        snapshot = await refresh_snapshot(make_service(RecordingTransport(handler)), path)

        assert snapshot.movies == []
        assert path.read_text(encoding="utf-8") == EMPTY_SNAPSHOT

    @pytest.mark.asyncio
    async def test_success_writes_movies(self, tmp_path, contentful_payload):
        """Test a successful fetch is written in full."""
        path = tmp_path / "cmsData.json"
        transport = RecordingTransport(lambda req: json_response(200, contentful_payload))

        await refresh_snapshot(make_service(transport), path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [m["id"] for m in data["movies"]] == ["inception", "bare"]
        assert data["movies"][0]["releaseYear"] == 2010
        assert data["movies"][0]["source"] == "remote"

    @pytest.mark.asyncio
    async def test_rerun_is_byte_identical(self, tmp_path, contentful_payload):
        """Test two runs against the same upstream produce identical files."""
        path = tmp_path / "cmsData.json"

        await refresh_snapshot(
            make_service(RecordingTransport(lambda req: json_response(200, contentful_payload))),
            path,
        )
        first = path.read_bytes()
        await refresh_snapshot(
            make_service(RecordingTransport(lambda req: json_response(200, contentful_payload))),
            path,
        )

        assert path.read_bytes() == first


class TestReadSnapshot:
    """Tests for read_snapshot and write_snapshot."""

    def test_missing_file(self, tmp_path):
        assert read_snapshot(tmp_path / "nope.json") == []

    def test_corrupt_file(self, tmp_path, log_messages):
        path = tmp_path / "cmsData.json"
        path.write_text("{not json", encoding="utf-8")
        assert read_snapshot(path) == []
        assert any(m.startswith("ERROR") for m in log_messages)

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "cmsData.json"
        path.write_text('{"movies": {"id": "x"}}', encoding="utf-8")
        assert read_snapshot(path) == []

    def test_write_then_read(self, tmp_path):
        path = tmp_path / "cmsData.json"
        movie = MovieRecord(id="e1", source=MovieSource.REMOTE, title="Heat", release_year=1995)
        write_snapshot(path, Snapshot(movies=[movie]))

        assert read_snapshot(path) == [movie]
        assert list(tmp_path.iterdir()) == [path]
