import httpx
import pytest

from spotify_mcp.services.spotify import (
    MissingTokenError,
    NoResultsError,
    SpotifyAPIError,
    SpotifyService,
    extract_id,
)


class TestExtractId:
    def test_uri(self):
        assert extract_id("spotify:track:4uLU6hMCjMI75M1A2tKUQC") == "4uLU6hMCjMI75M1A2tKUQC"

    def test_nested_uri(self):
        assert extract_id("spotify:user:me:playlist:37i9dQZF1DXcBWIGoYBM5M") == "37i9dQZF1DXcBWIGoYBM5M"

    def test_bare_id(self):
        assert extract_id("4uLU6hMCjMI75M1A2tKUQC") == "4uLU6hMCjMI75M1A2tKUQC"

    def test_trailing_separator(self):
        assert extract_id("spotify:track:") == "spotify:track:"


@pytest.mark.asyncio
async def test_request_headers(service, spy):
    await service.get_user_profile("abc123")

    request = spy.requests[0]
    assert request.method == "GET"
    assert str(request.url) == "https://api.spotify.com/v1/me"
    assert request.headers["Authorization"] == "Bearer abc123"
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_bearer_prefix_is_not_doubled(service, spy):
    await service.get_user_profile("bearer abc123")
    assert spy.requests[0].headers["Authorization"] == "Bearer abc123"


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["", "   "])
async def test_missing_token_makes_no_request(service, spy, token):
    with pytest.raises(MissingTokenError, match="Access token is required"):
        await service.search_tracks(token, "hello")
    with pytest.raises(MissingTokenError):
        await service.create_playlist(token, "Mix")
    with pytest.raises(MissingTokenError):
        await service.search_and_play(token, "hello")
    assert spy.requests == []


class TestLimitClamping:
    @pytest.mark.asyncio
    async def test_search_limit_clamped(self, service, spy):
        await service.search_tracks("t", "daft punk", limit=999)
        params = spy.requests[0].url.params
        assert params["limit"] == "50"
        assert params["type"] == "track"
        assert params["q"] == "daft punk"

    @pytest.mark.asyncio
    async def test_recommendations_ceiling(self, service, spy):
        await service.get_recommendations("t", {"limit": 999, "seed_genres": "house"})
        params = spy.requests[0].url.params
        assert params["limit"] == "100"
        assert params["seed_genres"] == "house"

    @pytest.mark.asyncio
    async def test_user_playlists_clamped(self, service, spy):
        await service.get_user_playlists("t", limit=75)
        assert spy.requests[0].url.params["limit"] == "50"

    @pytest.mark.asyncio
    async def test_limit_within_range_passes_through(self, service, spy):
        await service.get_top_artists("t", "short_term", limit=7)
        params = spy.requests[0].url.params
        assert params["limit"] == "7"
        assert params["time_range"] == "short_term"


class TestErrors:
    @pytest.mark.asyncio
    async def test_upstream_message(self, service, spy):
        spy.route("GET", "albums/missing", status=404, body={"error": {"status": 404, "message": "Non existing id"}})
        with pytest.raises(SpotifyAPIError) as exc_info:
            await service.get_album("t", "missing")
        error = exc_info.value
        assert str(error) == "Spotify API Error: 404 - Non existing id"
        assert error.status_code == 404
        assert not error.retryable

    @pytest.mark.asyncio
    async def test_status_text_fallback(self, service, spy):
        spy.route("GET", "me", status=503)
        with pytest.raises(SpotifyAPIError) as exc_info:
            await service.get_user_profile("t")
        assert str(exc_info.value) == "Spotify API Error: 503 - Service Unavailable"
        assert exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_unreachable(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = SpotifyService(transport=httpx.MockTransport(refuse))
        with pytest.raises(SpotifyAPIError) as exc_info:
            await service.get_user_profile("t")
        assert str(exc_info.value) == "Unable to connect to Spotify API"
        assert exc_info.value.status_code is None
        assert exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_request_error(self):
        def unsupported(request):
            raise httpx.UnsupportedProtocol("Request URL has an unsupported protocol", request=request)

        service = SpotifyService(transport=httpx.MockTransport(unsupported))
        with pytest.raises(SpotifyAPIError, match="^Request error:") as exc_info:
            await service.get_user_profile("t")
        assert exc_info.value.status_code is None
        assert not exc_info.value.retryable


@pytest.mark.asyncio
async def test_empty_response_is_none(service, spy):
    spy.route("PUT", "me/player/pause", status=204)
    assert await service.pause_playback("t", device_id="dev1") is None
    assert spy.requests[0].url.params["device_id"] == "dev1"


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [b"snapshot-ok", b"\xff\xfe{"])
async def test_non_json_body_is_returned_as_text(content):
    service = SpotifyService(transport=httpx.MockTransport(lambda request: httpx.Response(200, content=content)))
    result = await service.get_user_profile("t")
    assert isinstance(result, str)
    assert result == httpx.Response(200, content=content).text


@pytest.mark.asyncio
async def test_save_tracks_sends_bare_ids(service, spy):
    await service.save_tracks("t", ["spotify:track:A", "B"])
    request = spy.requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/v1/me/tracks"
    assert request.url.params["ids"] == "A,B"


@pytest.mark.asyncio
async def test_remove_tracks_from_playlist_body(service, spy):
    spy.route("DELETE", "playlists/PL1/tracks", body={"snapshot_id": "s1"})
    result = await service.remove_tracks_from_playlist("t", "spotify:playlist:PL1", ["spotify:track:A"])
    assert result == {"snapshot_id": "s1"}
    assert spy.requests[0].method == "DELETE"
    assert spy.body() == {"tracks": [{"uri": "spotify:track:A"}]}


@pytest.mark.asyncio
async def test_set_volume_clamps(service, spy):
    await service.set_volume("t", 150)
    request = spy.requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/v1/me/player/volume"
    assert request.url.params["volume_percent"] == "100"
    assert "device_id" not in request.url.params


@pytest.mark.asyncio
async def test_add_to_queue(service, spy):
    await service.add_to_queue("t", "spotify:track:A", device_id="dev1")
    request = spy.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v1/me/player/queue"
    assert request.url.params["uri"] == "spotify:track:A"
    assert request.url.params["device_id"] == "dev1"


class TestPlayMusic:
    @pytest.mark.asyncio
    async def test_single_track_normalized(self, service, spy):
        await service.play_music("t", track_uris="4uLU6hMCjMI75M1A2tKUQC")
        assert spy.body() == {"uris": ["spotify:track:4uLU6hMCjMI75M1A2tKUQC"]}

    @pytest.mark.asyncio
    async def test_track_list_and_context(self, service, spy):
        await service.play_music(
            "t",
            track_uris=["spotify:track:A", "spotify:track:B"],
            context_uri="spotify:album:X",
            device_id="dev1",
        )
        request = spy.requests[0]
        assert request.method == "PUT"
        assert request.url.params["device_id"] == "dev1"
        assert spy.body() == {"uris": ["spotify:track:A", "spotify:track:B"], "context_uri": "spotify:album:X"}

    @pytest.mark.asyncio
    async def test_transfer_playback(self, service, spy):
        await service.transfer_playback("t", "dev2", play=True)
        assert spy.requests[0].url.path == "/v1/me/player"
        assert spy.body() == {"device_ids": ["dev2"], "play": True}


@pytest.mark.asyncio
async def test_create_playlist_looks_up_user(service, spy):
    spy.route("GET", "me", body={"id": "user1"})
    spy.route("POST", "users/user1/playlists", body={"id": "PL9", "name": "Mix"})

    playlist = await service.create_playlist("t", "Mix", "Late night", is_public=False)

    assert playlist["id"] == "PL9"
    assert [(r.method, r.url.path) for r in spy.requests] == [
        ("GET", "/v1/me"),
        ("POST", "/v1/users/user1/playlists"),
    ]
    assert spy.body() == {"name": "Mix", "description": "Late night", "public": False}


class TestSearchAndPlay:
    @pytest.mark.asyncio
    async def test_no_results(self, service, spy):
        spy.route("GET", "search", body={"tracks": {"items": []}})
        with pytest.raises(NoResultsError, match="No tracks found"):
            await service.search_and_play("t", "zzzz")
        assert [r.method for r in spy.requests] == ["GET"]

    @pytest.mark.asyncio
    async def test_plays_first_match(self, service, spy):
        spy.route("GET", "search", body={"tracks": {"items": [{"id": "T1", "name": "One More Time"}]}})
        spy.route("PUT", "me/player/play", status=204)

        track = await service.search_and_play("t", "one more time")

        assert track["id"] == "T1"
        assert [(r.method, r.url.path) for r in spy.requests] == [
            ("GET", "/v1/search"),
            ("PUT", "/v1/me/player/play"),
        ]
        assert spy.requests[0].url.params["type"] == "track"
        assert spy.body() == {"uris": ["spotify:track:T1"]}
