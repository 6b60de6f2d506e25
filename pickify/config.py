"""Constants and default locations shared across the app."""

import os
from pathlib import Path

APP_NAME = "pickify"

# Spotify API
DEFAULT_CLIENT_ID = "cb4b2d66eaa84bdc98e5e179a5bfc902"
SPOTIFY_SCOPES = (
    "app-remote-control",
    "playlist-read-collaborative",
    "playlist-read-private",
    "playlist-modify-private",
    "playlist-modify-public",
    "streaming",
    "user-follow-read",
    "user-follow-modify",
    "user-library-modify",
    "user-library-read",
    "user-modify-playback-state",
    "user-read-currently-playing",
    "user-read-playback-state",
    "user-read-playback-position",
    "user-read-private",
    "user-read-recently-played",
    "user-top-read",
)
SPOTIFY_REQUESTS_TIMEOUT = 10  # seconds per Web API call
TOKEN_EXPIRY_SKEW = 60  # refresh this many seconds before expiry

# Authentication
REDIRECT_HOST = "localhost"  # advertised in the redirect URI and bound by the listener
DEFAULT_REDIRECT_URI_PORT = 8888
DEFAULT_CALLBACK_TIMEOUT = 120.0
CALLBACK_PATH = "/callback"

# Menus
DEFAULT_PROGRAM = "rofi"
MODE_PROMPT = "pickify"
SEARCH_LIMIT = 25
PLAYLISTS_LIMIT = 50
LIKED_SONGS_LIMIT = 100

# Notifications
NOTIFICATION_TIMEOUT = 5  # seconds to wait on notify-send


def config_dir() -> Path:
    override = os.getenv("PICKIFY_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    base = os.getenv("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_NAME


def cache_dir() -> Path:
    override = os.getenv("PICKIFY_CACHE_DIR")
    if override:
        return Path(override).expanduser()
    base = os.getenv("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base) / APP_NAME


def config_path() -> Path:
    return config_dir() / "config.json"


def token_cache_path() -> Path:
    return cache_dir() / "token.json"
