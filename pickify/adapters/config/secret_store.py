"""Secret storage helpers for local credentials."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import keyring
from keyring.errors import KeyringError

from pickify.config import APP_NAME

logger = logging.getLogger("pickify.config.secrets")


class SecretStoreProtocol(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> bool:
        ...


class KeyringSecretStore:
    """Store and retrieve secrets from the OS keychain.

    Every method degrades to "not stored" when no keychain backend is usable,
    so callers can keep a plaintext copy instead.
    """

    def __init__(self, service_name: str = APP_NAME):
        self.service_name = service_name

    def get(self, key: str) -> Optional[str]:
        try:
            return keyring.get_password(self.service_name, key)
        except KeyringError as exc:
            logger.debug("Keychain read of %s unavailable: %s", key, exc)
            return None

    def set(self, key: str, value: str) -> bool:
        try:
            if value:
                keyring.set_password(self.service_name, key, value)
            else:
                self.delete(key)
            return True
        except KeyringError as exc:
            logger.debug("Keychain write of %s unavailable: %s", key, exc)
            return False

    def delete(self, key: str) -> bool:
        try:
            keyring.delete_password(self.service_name, key)
            return True
        except KeyringError:
            return False
