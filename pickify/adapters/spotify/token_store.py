"""On-disk token cache."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pickify.adapters.config.secret_store import KeyringSecretStore, SecretStoreProtocol
from pickify.config import token_cache_path
from pickify.domain.errors import TokenCacheError
from pickify.domain.model import Token
from pickify.domain.ports import TokenStorePort
from pickify.storage.atomic_file import write_json_atomic

logger = logging.getLogger("pickify.auth.cache")

_REFRESH_TOKEN_KEY = "refresh_token"


class FileTokenStore(TokenStorePort):
    """Persist the token as one JSON document.

    The refresh token goes to the secret store when it accepts it and is left
    blank in the file; otherwise it is kept in plaintext.
    """

    def __init__(self, path: str | Path | None = None, secret_store: SecretStoreProtocol | None = None):
        self.path = Path(path) if path else token_cache_path()
        self.secret_store = secret_store or KeyringSecretStore()

    def load(self) -> Optional[Token]:
        if not self.path.exists():
            return None
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise TokenCacheError(f"Failed to read token cache {self.path}: {exc}") from exc

        try:
            data = json.loads(raw.decode("utf-8"))
            if not isinstance(data, dict):
                raise ValueError("token cache is not a JSON object")
            if not data.get(_REFRESH_TOKEN_KEY):
                data[_REFRESH_TOKEN_KEY] = self.secret_store.get(_REFRESH_TOKEN_KEY)
            return Token.from_token_info(data)
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring corrupt token cache %s: %s", self.path, exc)
            return None

    def save(self, token: Token) -> None:
        info = token.to_token_info()
        stored = self.secret_store.set(_REFRESH_TOKEN_KEY, token.refresh_token or "")
        if stored:
            info[_REFRESH_TOKEN_KEY] = ""
        try:
            write_json_atomic(self.path, info)
        except OSError as exc:
            raise TokenCacheError(f"Failed to write token cache {self.path}: {exc}") from exc
        logger.info("Token cache written to %s", self.path)

    def clear(self) -> None:
        self.secret_store.set(_REFRESH_TOKEN_KEY, "")
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise TokenCacheError(f"Failed to remove token cache {self.path}: {exc}") from exc
