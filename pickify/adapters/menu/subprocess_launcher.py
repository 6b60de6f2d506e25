"""Run a dmenu-style picker as a blocking subprocess."""

import logging
import subprocess

from pickify.adapters.menu import PROGRAMS
from pickify.domain.errors import MenuLauncherError
from pickify.domain.ports import MenuLauncherPort

logger = logging.getLogger("pickify.menu")


class SubprocessMenuLauncher(MenuLauncherPort):

    def __init__(self, program: str):
        if program not in PROGRAMS:
            raise MenuLauncherError(f"Unsupported picker program: {program!r}")
        self.program = program

    def command(self, prompt: str) -> list[str]:
        entry = PROGRAMS[self.program]
        cmd = list(entry["command"])
        if prompt:
            cmd.extend([entry["prompt_flag"], prompt])
        return cmd

    def pick(self, items: list[str], prompt: str) -> str:
        cmd = self.command(prompt)
        logger.debug("Launching %s with %s items", cmd[0], len(items))
        try:
            completed = subprocess.run(
                cmd,
                input="\n".join(items),
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise MenuLauncherError(f"Failed to launch {PROGRAMS[self.program]['name']}: {exc}") from exc

        # rofi/dmenu exit non-zero with empty output when the user cancels
        return (completed.stdout or "").strip()
