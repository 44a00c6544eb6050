from typing import Any

from spotify_mcp.services.spotify import SpotifyService


async def search_music(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.search_music(args["token"], args["query"], args["type"], args["limit"])


async def search_and_play_music(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.search_and_play(args["token"], args["query"])


HANDLERS = {
    "search_music": search_music,
    "search_and_play_music": search_and_play_music,
}
