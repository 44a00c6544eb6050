import logging
import re
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.spotify.com/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0

MAX_LIMIT = 50
MAX_RECOMMENDATIONS_LIMIT = 100

_BEARER_PREFIX = re.compile(r"^Bearer\s+", re.IGNORECASE)


class SpotifyError(Exception):
    pass


class MissingTokenError(SpotifyError, ValueError):
    def __init__(self) -> None:
        super().__init__("Access token is required")


class SpotifyAPIError(SpotifyError):
    """
    Any failed request. status_code is None when no response was received
    (connectivity) or the request could not be built.
    """

    def __init__(self, message: str, status_code: int | None = None, connectivity: bool = False) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.connectivity = connectivity

    @property
    def retryable(self) -> bool:
        if self.status_code is None:
            return self.connectivity
        return self.status_code >= 500


class NoResultsError(SpotifyError):
    pass


def extract_id(uri_or_id: str) -> str:
    """Reduce 'spotify:track:ID' style URIs to the bare ID."""
    if ":" in uri_or_id:
        return uri_or_id.rsplit(":", 1)[-1] or uri_or_id
    return uri_or_id


def _clamp_limit(limit: int, ceiling: int = MAX_LIMIT) -> int:
    return min(int(limit), ceiling)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    return response.reason_phrase


class SpotifyService:
    """Thin async client for the Spotify Web API. Every call carries its own token."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    @staticmethod
    def _auth_headers(token: str) -> dict[str, str]:
        if not token or not token.strip():
            raise MissingTokenError()
        clean_token = _BEARER_PREFIX.sub("", token.strip())
        return {
            "Authorization": f"Bearer {clean_token}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        endpoint: str,
        token: str,
        params: dict[str, Any] | None = None,
        method: str = "GET",
        data: Any = None,
    ) -> Any:
        headers = self._auth_headers(token)
        url = endpoint if endpoint.startswith("http") else f"{self._base_url}/{endpoint}"
        query = {key: value for key, value in (params or {}).items() if value is not None}

        logger.debug(f"Spotify {method} {url} params={query}")

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    params=query or None,
                    headers=headers,
                    json=data,
                )
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise SpotifyAPIError(f"Request error: {e}") from e
        except httpx.RequestError as e:
            logger.warning(f"Spotify request to {url} failed: {e}")
            raise SpotifyAPIError("Unable to connect to Spotify API", connectivity=True) from e

        if not response.is_success:
            message = _error_message(response)
            raise SpotifyAPIError(
                f"Spotify API Error: {response.status_code} - {message}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    # User

    async def get_user_profile(self, token: str) -> dict[str, Any]:
        return await self._request("me", token)

    async def get_top_tracks(self, token: str, time_range: str = "medium_term", limit: int = 20) -> dict[str, Any]:
        params = {"time_range": time_range, "limit": _clamp_limit(limit)}
        return await self._request("me/top/tracks", token, params)

    async def get_top_artists(self, token: str, time_range: str = "medium_term", limit: int = 20) -> dict[str, Any]:
        params = {"time_range": time_range, "limit": _clamp_limit(limit)}
        return await self._request("me/top/artists", token, params)

    async def get_followed_artists(self, token: str, limit: int = 20) -> dict[str, Any]:
        params = {"type": "artist", "limit": _clamp_limit(limit)}
        return await self._request("me/following", token, params)

    # Albums

    async def get_album(self, token: str, album_id: str) -> dict[str, Any]:
        return await self._request(f"albums/{extract_id(album_id)}", token)

    async def get_album_tracks(self, token: str, album_id: str, limit: int = 50) -> dict[str, Any]:
        params = {"limit": _clamp_limit(limit)}
        return await self._request(f"albums/{extract_id(album_id)}/tracks", token, params)

    async def get_new_releases(self, token: str, limit: int = 20, country: str | None = None) -> dict[str, Any]:
        params = {"limit": _clamp_limit(limit), "country": country or None}
        return await self._request("browse/new-releases", token, params)

    async def search_albums(self, token: str, query: str, limit: int = 20) -> dict[str, Any]:
        return await self.search_music(token, query, "album", limit)

    # Artists

    async def get_artist(self, token: str, artist_id: str) -> dict[str, Any]:
        return await self._request(f"artists/{extract_id(artist_id)}", token)

    async def get_artist_albums(
        self, token: str, artist_id: str, album_type: str = "album", limit: int = 20
    ) -> dict[str, Any]:
        params = {"include_groups": album_type, "limit": _clamp_limit(limit)}
        return await self._request(f"artists/{extract_id(artist_id)}/albums", token, params)

    async def get_related_artists(self, token: str, artist_id: str) -> dict[str, Any]:
        return await self._request(f"artists/{extract_id(artist_id)}/related-artists", token)

    async def get_artist_top_tracks(self, token: str, artist_id: str, country: str = "US") -> dict[str, Any]:
        params = {"market": country}
        return await self._request(f"artists/{extract_id(artist_id)}/top-tracks", token, params)

    async def search_artists(self, token: str, query: str, limit: int = 20) -> dict[str, Any]:
        return await self.search_music(token, query, "artist", limit)

    # Tracks

    async def get_liked_tracks(self, token: str, limit: int = 20, offset: int = 0) -> dict[str, Any]:
        params = {"limit": _clamp_limit(limit), "offset": offset}
        return await self._request("me/tracks", token, params)

    async def save_tracks(self, token: str, track_ids: str | list[str]) -> None:
        params = {"ids": ",".join(extract_id(i) for i in _as_list(track_ids))}
        return await self._request("me/tracks", token, params, "PUT")

    async def remove_tracks(self, token: str, track_ids: str | list[str]) -> None:
        params = {"ids": ",".join(extract_id(i) for i in _as_list(track_ids))}
        return await self._request("me/tracks", token, params, "DELETE")

    async def get_track(self, token: str, track_id: str) -> dict[str, Any]:
        return await self._request(f"tracks/{extract_id(track_id)}", token)

    async def get_audio_features(self, token: str, track_id: str) -> dict[str, Any]:
        return await self._request(f"audio-features/{extract_id(track_id)}", token)

    async def search_tracks(self, token: str, query: str, limit: int = 20) -> dict[str, Any]:
        return await self.search_music(token, query, "track", limit)

    async def get_recommendations(self, token: str, options: dict[str, Any] | None = None) -> dict[str, Any]:
        params = dict(options or {})
        params["limit"] = _clamp_limit(params.get("limit") or 20, MAX_RECOMMENDATIONS_LIMIT)
        return await self._request("recommendations", token, params)

    # Search

    async def search_music(self, token: str, query: str, type: str = "track", limit: int = 10) -> dict[str, Any]:
        params = {"q": query, "type": type, "limit": _clamp_limit(limit)}
        return await self._request("search", token, params)

    async def search_and_play(self, token: str, query: str) -> dict[str, Any]:
        """Search for tracks and start playing the first match."""
        result = await self.search_music(token, query)
        items = ((result or {}).get("tracks") or {}).get("items") or []
        if not items:
            raise NoResultsError("No tracks found for the search query")
        track = items[0]
        logger.info(f"Playing first match for '{query}': {track.get('name', track['id'])}")
        await self.play_music(token, track_uris=track["id"])
        return track

    # Playlists

    async def get_user_playlists(self, token: str, limit: int = 20) -> dict[str, Any]:
        return await self._request("me/playlists", token, {"limit": _clamp_limit(limit)})

    async def get_playlist(self, token: str, playlist_id: str) -> dict[str, Any]:
        return await self._request(f"playlists/{extract_id(playlist_id)}", token)

    async def get_playlist_tracks(self, token: str, playlist_id: str, limit: int = 50) -> dict[str, Any]:
        params = {"limit": _clamp_limit(limit)}
        return await self._request(f"playlists/{extract_id(playlist_id)}/tracks", token, params)

    async def create_playlist(
        self, token: str, name: str, description: str = "", is_public: bool = True
    ) -> dict[str, Any]:
        profile = await self.get_user_profile(token)
        data = {"name": name, "description": description, "public": is_public}
        return await self._request(f"users/{profile['id']}/playlists", token, method="POST", data=data)

    async def add_tracks_to_playlist(self, token: str, playlist_id: str, track_uris: str | list[str]) -> dict[str, Any]:
        data = {"uris": _as_list(track_uris)}
        return await self._request(f"playlists/{extract_id(playlist_id)}/tracks", token, method="POST", data=data)

    async def remove_tracks_from_playlist(
        self, token: str, playlist_id: str, track_uris: str | list[str]
    ) -> dict[str, Any]:
        data = {"tracks": [{"uri": uri} for uri in _as_list(track_uris)]}
        return await self._request(f"playlists/{extract_id(playlist_id)}/tracks", token, method="DELETE", data=data)

    async def search_playlists(self, token: str, query: str, limit: int = 20) -> dict[str, Any]:
        return await self.search_music(token, query, "playlist", limit)

    async def get_categories(self, token: str, limit: int = 20, country: str | None = None) -> dict[str, Any]:
        params = {"limit": _clamp_limit(limit), "country": country or None}
        return await self._request("browse/categories", token, params)

    async def save_playlist(self, token: str, playlist_id: str) -> None:
        return await self._request(f"playlists/{extract_id(playlist_id)}/followers", token, method="PUT")

    async def unsave_playlist(self, token: str, playlist_id: str) -> None:
        return await self._request(f"playlists/{extract_id(playlist_id)}/followers", token, method="DELETE")

    # Playback

    async def get_current_playback(self, token: str) -> dict[str, Any] | None:
        return await self._request("me/player", token)

    async def get_recently_played(self, token: str, limit: int = 20) -> dict[str, Any]:
        return await self._request("me/player/recently-played", token, {"limit": _clamp_limit(limit)})

    async def add_to_queue(self, token: str, track_uri: str, device_id: str | None = None) -> None:
        params = {"uri": track_uri, "device_id": device_id}
        return await self._request("me/player/queue", token, params, "POST")

    async def play_music(
        self,
        token: str,
        track_uris: str | list[str] | None = None,
        context_uri: str | None = None,
        device_id: str | None = None,
    ) -> None:
        data: dict[str, Any] = {}
        if track_uris:
            if isinstance(track_uris, str):
                data["uris"] = [f"spotify:track:{extract_id(track_uris)}"]
            else:
                data["uris"] = list(track_uris)
        if context_uri:
            data["context_uri"] = context_uri
        return await self._request("me/player/play", token, {"device_id": device_id}, "PUT", data)

    async def resume_playback(
        self,
        token: str,
        context_uri: str | None = None,
        track_uris: str | list[str] | None = None,
        device_id: str | None = None,
    ) -> None:
        return await self.play_music(token, track_uris, context_uri, device_id)

    async def pause_playback(self, token: str, device_id: str | None = None) -> None:
        return await self._request("me/player/pause", token, {"device_id": device_id}, "PUT")

    async def skip_to_next(self, token: str, device_id: str | None = None) -> None:
        return await self._request("me/player/next", token, {"device_id": device_id}, "POST")

    async def skip_to_previous(self, token: str, device_id: str | None = None) -> None:
        return await self._request("me/player/previous", token, {"device_id": device_id}, "POST")

    async def set_volume(self, token: str, volume_percent: int, device_id: str | None = None) -> None:
        volume = min(max(int(volume_percent), 0), 100)
        params = {"volume_percent": volume, "device_id": device_id}
        return await self._request("me/player/volume", token, params, "PUT")

    async def get_user_devices(self, token: str) -> dict[str, Any]:
        return await self._request("me/player/devices", token)

    async def transfer_playback(self, token: str, device_id: str, play: bool = False) -> None:
        data = {"device_ids": [device_id], "play": play}
        return await self._request("me/player", token, method="PUT", data=data)


def _as_list(value: str | list[str]) -> list[str]:
    if isinstance(value, str):
        return [value]
    return list(value)
