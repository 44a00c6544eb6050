from dataclasses import dataclass, field


@dataclass(frozen=True)
class ServerConfig:
    name: str = "spotify-mcp-service"
    version: str = "1.0.0"


@dataclass(frozen=True)
class SpotifyConfig:
    base_url: str = "https://api.spotify.com/v1"
    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    file: str | None = None  # Console only when unset
    max_bytes: int = 5_242_880
    backup_count: int = 3


@dataclass(frozen=True)
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    spotify: SpotifyConfig = field(default_factory=SpotifyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
