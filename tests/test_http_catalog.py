"""
Tests for the httpx Remote Catalog Adapter

Uses ``httpx.MockTransport`` so no request leaves the process.

Tests for:
- Request shape (client id, OAuth header, linked partitioning)
- Decoding of track pages, activity stream pages and track details
- Stream URL resolution through the redirect Location header
- Translation of transport, status and payload failures into RemoteFetchError
- Liking tracks and following uploaders
- Client ownership and closing
"""

import httpx
import pytest
from conftest import make_ref, make_track, track_payload
from pydantic import SecretStr

from voice_music_player.config.settings import CatalogSettings
from voice_music_player.domain.catalog.exceptions import RemoteFetchError, TrackNotStreamableError
from voice_music_player.infrastructure.catalog.http_catalog import HttpRemoteCatalog

CURSOR = "https://api.example.com/me/favorites?cursor=abc&linked_partitioning=1"


def _settings() -> CatalogSettings:
    return CatalogSettings(api_base_url="https://api.example.com/", client_id=SecretStr("cid"))


def _catalog(handler) -> tuple[HttpRemoteCatalog, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    return HttpRemoteCatalog(_settings(), http_client=client), seen


# =============================================================================
# Page Fetch Tests
# =============================================================================


class TestPageFetches:
    """Tests for paginated listings."""

    @pytest.mark.asyncio
    async def test_fetch_page_follows_cursor(self):
        catalog, seen = _catalog(
            lambda r: httpx.Response(
                200, json={"collection": [track_payload(1), track_payload(2)], "next_href": "https://n"}
            )
        )

        page = await catalog.fetch_page(CURSOR)

        assert page.references == [make_ref(1), make_ref(2)]
        assert page.next_href == "https://n"
        url = seen[0].url
        assert url.path == "/me/favorites"
        assert url.params["cursor"] == "abc"
        assert url.params["client_id"] == "cid"
        assert "authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_fetch_stream_page_sends_oauth_header(self):
        catalog, seen = _catalog(
            lambda r: httpx.Response(
                200,
                json={
                    "collection": [
                        {"type": "track", "origin": track_payload(3)},
                        {"type": "mystery", "origin": {}},
                    ],
                    "next_href": None,
                },
            )
        )

        page = await catalog.fetch_stream_page(CURSOR, "tok")

        assert page.references == [make_ref(3)]
        assert page.next_href is None
        assert seen[0].headers["Authorization"] == "OAuth tok"

    @pytest.mark.asyncio
    async def test_get_favorites(self):
        catalog, seen = _catalog(
            lambda r: httpx.Response(200, json={"collection": [track_payload(1)], "next_href": CURSOR})
        )

        page = await catalog.get_favorites("tok")

        assert page.next_href == CURSOR
        url = seen[0].url
        assert str(url).startswith("https://api.example.com/me/favorites?")
        assert url.params["linked_partitioning"] == "1"
        assert url.params["client_id"] == "cid"
        assert seen[0].headers["Authorization"] == "OAuth tok"

    @pytest.mark.asyncio
    async def test_page_with_broken_track_keeps_the_rest(self):
        catalog, _ = _catalog(
            lambda r: httpx.Response(
                200,
                json={
                    "collection": [track_payload(1), track_payload(2, title=""), track_payload(3)],
                    "next_href": "https://n",
                },
            )
        )

        page = await catalog.fetch_page(CURSOR)

        assert page.references == [make_ref(1), make_ref(3)]
        assert page.next_href == "https://n"

    @pytest.mark.asyncio
    async def test_get_activity_stream(self):
        catalog, seen = _catalog(
            lambda r: httpx.Response(
                200, json={"collection": [{"type": "track-repost", "origin": track_payload(5)}]}
            )
        )

        page = await catalog.get_activity_stream("tok")

        assert page.references == [make_ref(5)]
        assert seen[0].url.path == "/me/activities/tracks/affiliated"

    @pytest.mark.asyncio
    async def test_resolve_track(self):
        catalog, seen = _catalog(lambda r: httpx.Response(200, json=track_payload(8)))

        track = await catalog.resolve_track(make_ref(8))

        assert track.id == 8
        assert seen[0].url.path == "/tracks/8"


# =============================================================================
# Failure Translation Tests
# =============================================================================


class TestFailures:
    """Tests for error translation at the adapter boundary."""

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        catalog, _ = _catalog(lambda r: httpx.Response(503))

        with pytest.raises(RemoteFetchError) as exc_info:
            await catalog.fetch_page(CURSOR)

        assert exc_info.value.status == 503
        assert exc_info.value.url == CURSOR

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        catalog, _ = _catalog(fail)

        with pytest.raises(RemoteFetchError, match="connection refused"):
            await catalog.get_favorites("tok")

    @pytest.mark.asyncio
    async def test_undecodable_json(self):
        catalog, _ = _catalog(lambda r: httpx.Response(200, content=b"<html>"))

        with pytest.raises(RemoteFetchError, match="could not be decoded"):
            await catalog.fetch_page(CURSOR)

    @pytest.mark.asyncio
    async def test_payload_failing_validation(self):
        catalog, _ = _catalog(lambda r: httpx.Response(200, json={"collection": {"id": "x"}}))

        with pytest.raises(RemoteFetchError, match="could not be decoded"):
            await catalog.fetch_page(CURSOR)


# =============================================================================
# Stream URL Tests
# =============================================================================


class TestPlayableUrl:
    """Tests for stream redirect resolution."""

    @pytest.mark.asyncio
    async def test_returns_redirect_location(self):
        catalog, seen = _catalog(
            lambda r: httpx.Response(302, headers={"Location": "https://cdn.example.com/1.mp3"})
        )

        url = await catalog.to_playable_url(make_track(1))

        assert url == "https://cdn.example.com/1.mp3"
        assert len(seen) == 1
        assert seen[0].url.path == "/tracks/1/stream"
        assert seen[0].url.params["client_id"] == "cid"

    @pytest.mark.asyncio
    async def test_non_redirect_is_not_streamable(self):
        catalog, _ = _catalog(lambda r: httpx.Response(404))

        with pytest.raises(TrackNotStreamableError) as exc_info:
            await catalog.to_playable_url(make_track(1))

        assert exc_info.value.status == 404
        assert exc_info.value.reference == str(make_ref(1))

    @pytest.mark.asyncio
    async def test_success_without_location_is_not_streamable(self):
        catalog, _ = _catalog(lambda r: httpx.Response(200, content=b"audio"))

        with pytest.raises(TrackNotStreamableError):
            await catalog.to_playable_url(make_track(1))

    @pytest.mark.asyncio
    async def test_missing_stream_url_makes_no_request(self):
        catalog, seen = _catalog(lambda r: httpx.Response(302, headers={"Location": "https://x"}))

        with pytest.raises(TrackNotStreamableError, match="no stream URL"):
            await catalog.to_playable_url(make_track(1, stream_url=None))

        assert seen == []

    @pytest.mark.asyncio
    async def test_track_marked_unstreamable(self):
        catalog, seen = _catalog(lambda r: httpx.Response(302, headers={"Location": "https://x"}))

        with pytest.raises(TrackNotStreamableError):
            await catalog.to_playable_url(make_track(1, streamable=False))

        assert seen == []


# =============================================================================
# Feedback Tests
# =============================================================================


class TestFeedback:
    """Tests for liking tracks and following uploaders."""

    @pytest.mark.asyncio
    async def test_like_track_puts_favorite(self):
        catalog, seen = _catalog(lambda r: httpx.Response(201))

        await catalog.like_track("tok", make_track(4))

        assert seen[0].method == "PUT"
        assert seen[0].url.path == "/me/favorites/4"
        assert seen[0].url.params["client_id"] == "cid"
        assert seen[0].headers["Authorization"] == "OAuth tok"

    @pytest.mark.asyncio
    async def test_like_track_rejected(self):
        catalog, _ = _catalog(lambda r: httpx.Response(401))

        with pytest.raises(RemoteFetchError) as exc_info:
            await catalog.like_track("tok", make_track(4))

        assert exc_info.value.status == 401

    @pytest.mark.asyncio
    async def test_follow_unknown_user(self):
        catalog, seen = _catalog(lambda r: httpx.Response(404 if r.method == "GET" else 201))

        assert await catalog.follow_user("tok", make_track(1).user) is True

        assert [r.method for r in seen] == ["GET", "PUT"]
        assert all(r.url.path == "/me/followings/7" for r in seen)

    @pytest.mark.asyncio
    async def test_follow_already_followed_user(self):
        catalog, seen = _catalog(lambda r: httpx.Response(200, json={"id": 7}))

        assert await catalog.follow_user("tok", make_track(1).user) is False

        assert [r.method for r in seen] == ["GET"]

    @pytest.mark.asyncio
    async def test_follow_lookup_failure(self):
        catalog, seen = _catalog(lambda r: httpx.Response(500))

        with pytest.raises(RemoteFetchError) as exc_info:
            await catalog.follow_user("tok", make_track(1).user)

        assert exc_info.value.status == 500
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_follow_put_rejected(self):
        catalog, _ = _catalog(lambda r: httpx.Response(404 if r.method == "GET" else 403))

        with pytest.raises(RemoteFetchError) as exc_info:
            await catalog.follow_user("tok", make_track(1).user)

        assert exc_info.value.status == 403


# =============================================================================
# Lifecycle Tests
# =============================================================================


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        catalog = HttpRemoteCatalog(_settings(), http_client=client)

        await catalog.aclose()

        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_is_closed(self):
        catalog = HttpRemoteCatalog(_settings())
        client = catalog._get_client()

        await catalog.aclose()

        assert client.is_closed

    def test_settings_strip_trailing_slash(self):
        assert _settings().api_base_url == "https://api.example.com"
