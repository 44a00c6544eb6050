from typing import Any

from spotify_mcp.services.spotify import SpotifyService


async def get_album(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_album(args["token"], args["albumId"])


async def get_new_releases(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_new_releases(args["token"], args["limit"], args["country"])


async def get_album_tracks(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_album_tracks(args["token"], args["albumId"], args["limit"])


async def search_albums(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.search_albums(args["token"], args["query"], args["limit"])


HANDLERS = {
    "get_album": get_album,
    "get_new_releases": get_new_releases,
    "get_album_tracks": get_album_tracks,
    "search_albums": search_albums,
}
