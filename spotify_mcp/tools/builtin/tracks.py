from typing import Any

from spotify_mcp.services.spotify import SpotifyService

_SEED_PARAMS = {
    "seedTracks": "seed_tracks",
    "seedArtists": "seed_artists",
    "seedGenres": "seed_genres",
}


async def get_track(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_track(args["token"], args["trackId"])


async def get_audio_features(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_audio_features(args["token"], args["trackId"])


async def search_tracks(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.search_tracks(args["token"], args["query"], args["limit"])


async def get_liked_tracks(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_liked_tracks(args["token"], args["limit"], args["offset"])


async def save_tracks(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.save_tracks(args["token"], args["trackIds"])


async def remove_tracks(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.remove_tracks(args["token"], args["trackIds"])


async def get_top_tracks(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_top_tracks(args["token"], args["timeRange"], args["limit"])


async def get_recently_played(args: dict[str, Any], service: SpotifyService) -> Any:
    return await service.get_recently_played(args["token"], args["limit"])


async def get_recommendations(args: dict[str, Any], service: SpotifyService) -> Any:
    options: dict[str, Any] = {"limit": args["limit"]}
    for key, param in _SEED_PARAMS.items():
        if args[key]:
            options[param] = ",".join(args[key])
    return await service.get_recommendations(args["token"], options)


HANDLERS = {
    "get_track": get_track,
    "get_audio_features": get_audio_features,
    "search_tracks": search_tracks,
    "get_liked_tracks": get_liked_tracks,
    "save_tracks": save_tracks,
    "remove_tracks": remove_tracks,
    "get_top_tracks": get_top_tracks,
    "get_recently_played": get_recently_played,
    "get_recommendations": get_recommendations,
}
