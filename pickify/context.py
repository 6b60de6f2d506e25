"""Process-wide collaborators, built once at startup and passed explicitly."""

from dataclasses import dataclass
from typing import Optional

from pickify.domain.model import Settings
from pickify.domain.ports import ConfigPort, MenuLauncherPort, NotifierPort, RemoteServicePort


@dataclass
class AppContext:
    settings: Settings
    config: ConfigPort
    launcher: MenuLauncherPort
    notifier: NotifierPort
    service: Optional[RemoteServicePort] = None

    def require_service(self) -> RemoteServicePort:
        if self.service is None:
            raise RuntimeError("Remote service used before authentication")
        return self.service

    def configured_device_id(self) -> Optional[str]:
        """Re-read the default device from disk; other screens may have changed it."""
        cfg = self.config.load()
        device_id = cfg.get("device_id") or None
        self.settings.device_id = device_id
        return device_id
