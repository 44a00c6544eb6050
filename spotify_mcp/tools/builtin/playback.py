from typing import Any

from spotify_mcp.services.spotify import SpotifyService


async def get_currently_playing(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_current_playback(args["token"])


async def start_playback(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.play_music(
        args["token"],
        track_uris=args["trackUris"],
        context_uri=args["contextUri"],
        device_id=args["deviceId"],
    )


async def resume_player(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.resume_playback(
        args["token"],
        context_uri=args["contextUri"],
        track_uris=args["trackUris"],
        device_id=args["deviceId"],
    )


async def pause_player(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.pause_playback(args["token"], args["deviceId"])


async def skip_to_next(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.skip_to_next(args["token"], args["deviceId"])


async def skip_to_previous(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.skip_to_previous(args["token"], args["deviceId"])


async def set_volume(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.set_volume(args["token"], args["volumePercent"], args["deviceId"])


async def add_to_queue(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.add_to_queue(args["token"], args["trackUri"], args["deviceId"])


async def get_devices(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_user_devices(args["token"])


async def transfer_playback(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.transfer_playback(args["token"], args["deviceId"], args["play"])


HANDLERS = {
    "get_currently_playing": get_currently_playing,
    "start_playback": start_playback,
    "resume_player": resume_player,
    "pause_player": pause_player,
    "skip_to_next": skip_to_next,
    "skip_to_previous": skip_to_previous,
    "set_volume": set_volume,
    "add_to_queue": add_to_queue,
    "get_devices": get_devices,
    "transfer_playback": transfer_playback,
}
