"""Bounded context: Configuration

Token cache persistence and where the refresh credential is kept.
"""

import json
import time

import pytest

from pickify.adapters.spotify.token_store import FileTokenStore
from pickify.domain.errors import TokenCacheError
from pickify.domain.model import Token


class FakeSecretStore:
    def __init__(self, available: bool = True):
        self.available = available
        self.data: dict[str, str] = {}

    def get(self, key: str):
        return self.data.get(key)

    def set(self, key: str, value: str) -> bool:
        if not self.available:
            return False
        if value:
            self.data[key] = value
        else:
            self.data.pop(key, None)
        return True


@pytest.fixture
def token():
    return Token(
        access_token="access-1",
        expires_at=int(time.time()) + 3600,
        refresh_token="refresh-1",
        scope="user-library-read",
    )


@pytest.fixture
def cache_file(tmp_path):
    return tmp_path / "cache" / "token.json"


def test_refresh_token_goes_to_secret_store_when_available(cache_file, token):
    secrets = FakeSecretStore(available=True)
    store = FileTokenStore(path=cache_file, secret_store=secrets)

    store.save(token)

    on_disk = json.loads(cache_file.read_text(encoding="utf-8"))
    assert on_disk["refresh_token"] == ""
    assert on_disk["access_token"] == "access-1"
    assert secrets.data["refresh_token"] == "refresh-1"
    assert store.load() == token


def test_refresh_token_falls_back_to_plaintext_if_secret_store_unavailable(cache_file, token):
    store = FileTokenStore(path=cache_file, secret_store=FakeSecretStore(available=False))

    store.save(token)

    on_disk = json.loads(cache_file.read_text(encoding="utf-8"))
    assert on_disk["refresh_token"] == "refresh-1"
    assert store.load() == token


def test_missing_cache_means_no_token(cache_file):
    assert FileTokenStore(path=cache_file, secret_store=FakeSecretStore()).load() is None


@pytest.mark.parametrize(
    "content",
    ['{"access_token": "abc"', "[]", '{"expires_at": 1}', '{"access_token": "", "expires_at": 1}', "\udcff"],
)
def test_corrupt_cache_is_treated_as_missing(cache_file, content):
    cache_file.parent.mkdir(parents=True)
    cache_file.write_bytes(content.encode("utf-8", "surrogateescape"))

    assert FileTokenStore(path=cache_file, secret_store=FakeSecretStore()).load() is None


def test_unreadable_cache_is_fatal(tmp_path):
    directory = tmp_path / "token.json"
    directory.mkdir()

    with pytest.raises(TokenCacheError):
        FileTokenStore(path=directory, secret_store=FakeSecretStore()).load()


def test_write_failure_is_reported(tmp_path, token):
    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")

    with pytest.raises(TokenCacheError):
        FileTokenStore(path=blocker / "token.json", secret_store=FakeSecretStore()).save(token)


def test_save_replaces_the_previous_token_atomically(cache_file, token):
    store = FileTokenStore(path=cache_file, secret_store=FakeSecretStore(available=False))
    store.save(token)
    newer = Token(access_token="access-2", expires_at=token.expires_at + 60, refresh_token="refresh-1")

    store.save(newer)

    assert store.load().access_token == "access-2"
    assert [p.name for p in cache_file.parent.iterdir()] == ["token.json"]


def test_clear_forgets_everything(cache_file, token):
    secrets = FakeSecretStore()
    store = FileTokenStore(path=cache_file, secret_store=secrets)
    store.save(token)

    store.clear()

    assert not cache_file.exists()
    assert secrets.data == {}
    assert store.load() is None
