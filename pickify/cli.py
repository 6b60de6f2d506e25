"""Command line entry point: ``pickify show`` and ``pickify control <action>``."""

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

from pickify.adapters.config.json_config_adapter import JsonConfigAdapter, load_settings
from pickify.adapters.menu.subprocess_launcher import SubprocessMenuLauncher
from pickify.adapters.notify.notify_send import NotifySendNotifier
from pickify.adapters.spotify.oauth_adapter import SpotipyPkceOAuth, build_spotify_client
from pickify.adapters.spotify.remote_service import SpotipyRemoteService
from pickify.adapters.spotify.token_store import FileTokenStore
from pickify.auth.manager import AuthManager
from pickify.context import AppContext
from pickify.domain.errors import PickifyError
from pickify.domain.ports import NotifierPort, RemoteServicePort
from pickify.navigation.engine import NavigationEngine
from pickify.navigation.screens.device import resolve_device_id
from pickify.navigation.screens.mode import ModeScreen
from pickify.usecases.control import Action, ControlUseCase
from pickify.version import __version__

logger = logging.getLogger("pickify.cli")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pickify", description="Control Spotify from rofi/dmenu.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logs")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="browse, search and pick what to play")
    control = sub.add_parser("control", help="run one transport action")
    control.add_argument(
        "action",
        type=Action,
        choices=list(Action),
        metavar="{" + ",".join(a.value for a in Action) + "}",
    )
    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr)


def report_error(notifier: NotifierPort, message: str) -> None:
    logger.error("%s", message)
    notifier.error(message)


def build_context() -> AppContext:
    config = JsonConfigAdapter()
    settings = load_settings(config)
    return AppContext(
        settings=settings,
        config=config,
        launcher=SubprocessMenuLauncher(settings.program),
        notifier=NotifySendNotifier(),
    )


def build_auth_manager(context: AppContext, engine: NavigationEngine) -> AuthManager:
    token_store = FileTokenStore()
    oauth = SpotipyPkceOAuth(context.settings)
    return AuthManager(
        context=context,
        token_store=token_store,
        oauth=oauth,
        prompt_text=lambda prompt: engine.prompt_text(context, prompt),
        service_factory=lambda token: SpotipyRemoteService(build_spotify_client(token, oauth, token_store)),
    )


def run_command(
    args: argparse.Namespace,
    context: AppContext,
    engine: NavigationEngine,
    authenticate: Callable[[], RemoteServicePort],
) -> int:
    try:
        context.service = authenticate()
    except PickifyError as exc:
        report_error(context.notifier, f"Failed to authenticate with spotify: {exc}")
        return 1

    if args.command == "show":
        try:
            engine.run(ModeScreen(context))
        except PickifyError as exc:
            report_error(context.notifier, str(exc))
            return 1
        return 0

    control = ControlUseCase(context.service, context.notifier, lambda: resolve_device_id(context))
    try:
        control.execute(args.action)
    except PickifyError as exc:
        report_error(context.notifier, f'Failed to perform "{args.action}": {exc}')
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        context = build_context()
    except PickifyError as exc:
        report_error(NotifySendNotifier(), f"Failed to load config: {exc}")
        return 1

    engine = NavigationEngine()
    auth = build_auth_manager(context, engine)
    return run_command(args, context, engine, auth.authenticate)


def run() -> None:
    sys.exit(main())
