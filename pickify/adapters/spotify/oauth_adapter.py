"""Spotify OAuth2 (Authorization Code + PKCE) using spotipy."""

import logging
import secrets
from typing import Optional

import requests
import spotipy
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyOauthError, SpotifyPKCE

from pickify.config import SPOTIFY_REQUESTS_TIMEOUT, SPOTIFY_SCOPES
from pickify.domain.errors import AuthError, TransportError
from pickify.domain.model import AuthorizationRequest, AuthorizationResponse, Settings, Token
from pickify.domain.ports import OAuthPort, TokenStorePort

logger = logging.getLogger("pickify.auth.oauth")


def parse_redirect_url(redirect_url: str) -> AuthorizationResponse:
    """Read ``code``, ``state`` and ``error`` from a pasted redirect URL."""
    try:
        state, code = SpotifyPKCE.parse_auth_response_url((redirect_url or "").strip())
    except SpotifyOauthError as exc:
        return AuthorizationResponse(error=exc.error or str(exc))
    return AuthorizationResponse(code=code or None, state=state or None)


class SpotipyPkceOAuth(OAuthPort):
    """One SpotifyPKCE per login carries the verifier from begin() to the exchange.

    Every SpotifyPKCE gets an in-memory cache so that persistence stays with
    the caller's token store.
    """

    def __init__(self, settings: Settings, scopes: tuple[str, ...] = SPOTIFY_SCOPES):
        self.settings = settings
        self.scopes = scopes
        self._logins: dict[str, SpotifyPKCE] = {}

    def _pkce(self, state: Optional[str] = None) -> SpotifyPKCE:
        return SpotifyPKCE(
            client_id=self.settings.client_id,
            redirect_uri=self.settings.redirect_uri,
            state=state,
            scope=" ".join(self.scopes),
            cache_handler=MemoryCacheHandler(),
            open_browser=False,
            requests_timeout=SPOTIFY_REQUESTS_TIMEOUT,
        )

    def begin(self) -> tuple[AuthorizationRequest, str]:
        pkce = self._pkce(state=secrets.token_urlsafe(16))
        pkce.get_pkce_handshake_parameters()
        url = pkce.get_authorize_url()
        request = AuthorizationRequest(
            client_id=pkce.client_id,
            redirect_uri=pkce.redirect_uri,
            scopes=tuple(self.scopes),
            code_verifier=pkce.code_verifier,
            code_challenge=pkce.code_challenge,
            state=pkce.state,
        )
        self._logins[request.state] = pkce
        return request, url

    def parse_redirect(self, redirect_url: str) -> AuthorizationResponse:
        return parse_redirect_url(redirect_url)

    def exchange_code(self, request: AuthorizationRequest, code: str) -> Token:
        pkce = self._logins.pop(request.state, None)
        if pkce is None:
            raise AuthError("No login is waiting for this authorization code")
        try:
            pkce.get_access_token(code=code, check_cache=False)
        except SpotifyOauthError as exc:
            raise AuthError(f"Spotify rejected the authorization code: {exc}") from exc
        except requests.RequestException as exc:
            raise TransportError(f"Spotify token request failed: {exc}") from exc
        return _token_from_response(pkce.cache_handler.get_cached_token())

    def refresh(self, token: Token) -> Token:
        if not token.refresh_token:
            raise AuthError("Token has no refresh credential")
        pkce = self._pkce()
        try:
            info = pkce.refresh_access_token(token.refresh_token)
        except SpotifyOauthError as exc:
            raise AuthError(f"Spotify refused to refresh the token: {exc}") from exc
        except requests.RequestException as exc:
            raise TransportError(f"Spotify token refresh failed: {exc}") from exc
        return _token_from_response(info)


def _token_from_response(info) -> Token:
    try:
        return Token.from_token_info(info or {})
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthError(f"Malformed token response from Spotify: {exc}") from exc


class StoredTokenAuthManager:
    """spotipy auth manager serving the authenticated token.

    An access token that expires during the session is refreshed once and
    written back to the store.
    """

    def __init__(self, token: Token, oauth: OAuthPort, store: TokenStorePort):
        self._token = token
        self._oauth = oauth
        self._store = store

    def get_access_token(self, as_dict: bool = False):
        if self._token.is_expired():
            logger.info("Access token expired mid-session, refreshing")
            self._token = self._oauth.refresh(self._token)
            self._store.save(self._token)
        if as_dict:
            return self._token.to_token_info()
        return self._token.access_token


def build_spotify_client(token: Token, oauth: OAuthPort, store: TokenStorePort) -> spotipy.Spotify:
    return spotipy.Spotify(
        auth_manager=StoredTokenAuthManager(token, oauth, store),
        requests_timeout=SPOTIFY_REQUESTS_TIMEOUT,
        retries=0,
        status_retries=0,
    )
