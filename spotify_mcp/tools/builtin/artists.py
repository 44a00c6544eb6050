from typing import Any

from spotify_mcp.services.spotify import SpotifyService


async def get_artist(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_artist(args["token"], args["artistId"])


async def get_artist_albums(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_artist_albums(args["token"], args["artistId"], args["albumType"], args["limit"])


async def get_related_artists(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_related_artists(args["token"], args["artistId"])


async def get_artist_top_tracks(args: dict[str, Any], service: SpotifyService) -> Any:
    # The top-tracks endpoint requires a market
    return await service.get_artist_top_tracks(args["token"], args["artistId"], args["country"] or "US")


async def search_artists(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.search_artists(args["token"], args["query"], args["limit"])


async def get_followed_artists(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_followed_artists(args["token"], args["limit"])


async def get_top_artists(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_top_artists(args["token"], args["timeRange"], args["limit"])


HANDLERS = {
    "get_artist": get_artist,
    "get_artist_albums": get_artist_albums,
    "get_related_artists": get_related_artists,
    "get_artist_top_tracks": get_artist_top_tracks,
    "search_artists": search_artists,
    "get_followed_artists": get_followed_artists,
    "get_top_artists": get_top_artists,
}
