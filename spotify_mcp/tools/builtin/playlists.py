from typing import Any

from spotify_mcp.services.spotify import SpotifyService


async def get_playlist(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_playlist(args["token"], args["playlistId"])


async def get_user_playlists(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_user_playlists(args["token"], args["limit"])


async def get_playlist_tracks(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_playlist_tracks(args["token"], args["playlistId"], args["limit"])


async def create_playlist(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.create_playlist(
        args["token"],
        args["name"],
        args["description"] or "",
        args["isPublic"],
    )


async def add_to_playlist(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.add_tracks_to_playlist(args["token"], args["playlistId"], args["trackUris"])


async def remove_from_playlist(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.remove_tracks_from_playlist(args["token"], args["playlistId"], args["trackUris"])


async def search_playlists(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.search_playlists(args["token"], args["query"], args["limit"])


async def get_categories(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_categories(args["token"], args["limit"], args["country"])


async def save_playlist(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.save_playlist(args["token"], args["playlistId"])


async def unsave_playlist(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.unsave_playlist(args["token"], args["playlistId"])


HANDLERS = {
    "get_playlist": get_playlist,
    "get_user_playlists": get_user_playlists,
    "get_playlist_tracks": get_playlist_tracks,
    "create_playlist": create_playlist,
    "add_to_playlist": add_to_playlist,
    "remove_from_playlist": remove_from_playlist,
    "search_playlists": search_playlists,
    "get_categories": get_categories,
    "save_playlist": save_playlist,
    "unsave_playlist": unsave_playlist,
}
