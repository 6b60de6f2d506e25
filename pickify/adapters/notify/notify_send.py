"""Desktop notifications through notify-send, with a stderr fallback."""

import logging
import shutil
import subprocess
import sys

from pickify.config import APP_NAME, NOTIFICATION_TIMEOUT
from pickify.domain.errors import NotificationError
from pickify.domain.ports import NotifierPort

logger = logging.getLogger("pickify.notify")


class NotifySendNotifier(NotifierPort):
    """Send notifications with ``notify-send``; print to stderr if that fails."""

    def __init__(self, app_name: str = APP_NAME, icon: str | None = None, stream=None):
        self.app_name = app_name
        self.icon = icon
        self.stream = stream

    def notify(self, summary: str, body: str = "") -> None:
        try:
            self._send(summary, body)
        except NotificationError as exc:
            logger.warning("%s", exc)
            out = self.stream or sys.stderr
            print(f"Failed to send notification: {exc}", file=out)
            print("The original notification was:", file=out)
            print(f"\t{summary}", file=out)
            if body:
                print(f"\t{body}", file=out)

    def _send(self, summary: str, body: str) -> None:
        executable = shutil.which("notify-send")
        if not executable:
            raise NotificationError("notify-send is not installed")

        cmd = [executable, f"--app-name={self.app_name}"]
        if self.icon:
            cmd.append(f"--icon={self.icon}")
        cmd.append(summary)
        if body:
            cmd.append(body)

        try:
            subprocess.run(cmd, capture_output=True, check=True, timeout=NOTIFICATION_TIMEOUT)
        except (OSError, subprocess.SubprocessError) as exc:
            raise NotificationError(f"notify-send failed: {exc}") from exc
