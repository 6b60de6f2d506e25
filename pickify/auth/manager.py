"""Obtain a valid Spotify token: cache, silent refresh, or a fresh PKCE login."""

from __future__ import annotations

import logging
import webbrowser
from enum import Enum
from typing import Callable, Optional

import pyperclip

from pickify.auth.callback_server import CallbackListener
from pickify.context import AppContext
from pickify.domain.errors import (
    AuthError,
    ListenerBindError,
    PickifyError,
    StateMismatchError,
    UrlMissingParamError,
)
from pickify.domain.model import AuthorizationRequest, AuthorizationResponse, Token
from pickify.domain.ports import OAuthPort, RemoteServicePort, TokenStorePort

logger = logging.getLogger("pickify.auth")

REDIRECT_URL_PROMPT = "Paste the URL you were redirected to"


class AuthState(Enum):
    COLD_START = "cold_start"
    CACHE_HIT = "cache_hit"
    CACHE_EXPIRED = "cache_expired"
    REFRESHING = "refreshing"
    AWAITING_CODE = "awaiting_code"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


class AuthManager:
    """Single-flight authentication for one process invocation.

    A cached unexpired token is used as is. An expired one is refreshed
    silently; if that fails for any reason the user logs in again. Logging in
    opens the authorize URL, waits for one redirect on the local callback
    listener and falls back to asking for the redirect URL in the picker when
    the listener cannot bind or times out. A refreshed or newly exchanged
    token is persisted before the service handle is returned.
    """

    def __init__(
        self,
        context: AppContext,
        token_store: TokenStorePort,
        oauth: OAuthPort,
        prompt_text: Callable[[str], str],
        service_factory: Callable[[Token], RemoteServicePort],
        listener_factory: Callable[[int], CallbackListener] = CallbackListener,
        open_browser: Callable[[str], bool] = webbrowser.open,
        copy_to_clipboard: Callable[[str], None] = pyperclip.copy,
    ):
        self.context = context
        self.token_store = token_store
        self.oauth = oauth
        self.prompt_text = prompt_text
        self.service_factory = service_factory
        self.listener_factory = listener_factory
        self.open_browser = open_browser
        self.copy_to_clipboard = copy_to_clipboard
        self.history: list[AuthState] = []

    @property
    def state(self) -> Optional[AuthState]:
        return self.history[-1] if self.history else None

    def _enter(self, state: AuthState) -> None:
        logger.info("Auth state: %s", state.value)
        self.history.append(state)

    def authenticate(self) -> RemoteServicePort:
        if self.history:
            raise RuntimeError("authenticate() may only run once per process")
        try:
            token = self._obtain_token()
            if self.state is not AuthState.CACHE_HIT:
                self.token_store.save(token)
        except PickifyError:
            self._enter(AuthState.FAILED)
            raise
        self._enter(AuthState.AUTHENTICATED)
        return self.service_factory(token)

    def _obtain_token(self) -> Token:
        self._enter(AuthState.COLD_START)
        token = self.token_store.load()

        if token is not None and not token.is_expired():
            self._enter(AuthState.CACHE_HIT)
            return token

        if token is not None:
            self._enter(AuthState.CACHE_EXPIRED)
            refreshed = self._try_refresh(token)
            if refreshed is not None:
                return refreshed

        self._enter(AuthState.AWAITING_CODE)
        request, url = self.oauth.begin()
        code = self._await_code(request, url)
        return self.oauth.exchange_code(request, code)

    def _try_refresh(self, token: Token) -> Optional[Token]:
        if not token.refresh_token:
            logger.info("Cached token has no refresh credential")
            return None
        self._enter(AuthState.REFRESHING)
        try:
            return self.oauth.refresh(token)
        except PickifyError as exc:
            logger.warning("Token refresh failed, logging in again: %s", exc)
            return None

    def _await_code(self, request: AuthorizationRequest, url: str) -> str:
        self._share_login_url(url)

        result = self._listen_for_callback()
        if result is None:
            self.context.notifier.error(
                "Failed to receive the login redirect automatically. "
                "Paste the URL you were redirected to instead."
            )
            result = self.oauth.parse_redirect(self.prompt_text(REDIRECT_URL_PROMPT))

        if result.error:
            raise AuthError(f"Authorization denied: {result.error}")
        if result.state is not None and result.state != request.state:
            raise StateMismatchError("Redirect state does not match the login request")
        if not result.code:
            raise UrlMissingParamError("code")
        return result.code

    def _listen_for_callback(self) -> Optional[AuthorizationResponse]:
        listener = self.listener_factory(self.context.settings.redirect_uri_port)
        try:
            listener.start()
        except ListenerBindError as exc:
            logger.warning("%s", exc)
            return None
        return listener.wait(self.context.settings.callback_timeout)

    def _share_login_url(self, url: str) -> None:
        copied = True
        try:
            self.copy_to_clipboard(url)
        except pyperclip.PyperclipException as exc:
            copied = False
            logger.warning("Failed to copy login URL to clipboard: %s", exc)

        try:
            opened = bool(self.open_browser(url))
        except webbrowser.Error as exc:
            logger.warning("Failed to open browser: %s", exc)
            opened = False

        hint = " (login URL copied to clipboard)" if copied else ""
        if opened:
            self.context.notifier.notify("Login", f"Opened login page in your browser{hint}.")
        else:
            self.context.notifier.notify(
                "Could not open your browser",
                f"Please navigate to the login page manually{hint}.",
            )
            if not copied:
                logger.warning("Login URL: %s", url)
