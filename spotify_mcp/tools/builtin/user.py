from typing import Any

from spotify_mcp.services.spotify import SpotifyService


async def get_user_profile(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_user_profile(args["token"])


HANDLERS = {
    "get_user_profile": get_user_profile,
}
