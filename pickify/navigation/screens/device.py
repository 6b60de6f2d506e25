"""Pick the device that transport actions target by default."""

import logging
from typing import Optional, Sequence

from pickify.context import AppContext
from pickify.domain.errors import ConfigIOError, PickifyError
from pickify.domain.model import Device
from pickify.navigation.results import Exit, SelectionResult
from pickify.navigation.screens.base import IndexedScreen

logger = logging.getLogger("pickify.navigation.device")


class DeviceSelectionScreen(IndexedScreen[Device]):
    prompt = "Select Device"

    def __init__(self, context: AppContext, devices: Sequence[Device]):
        super().__init__(context, devices)

    def render_items(self) -> list[str]:
        return [device.display_line(i) for i, device in enumerate(self.entries)]

    def on_select(self, index: int, device: Device) -> SelectionResult:
        if not device.id:
            return self.fail(f"Device {device.name} has no ID")

        try:
            cfg = self.context.config.load()
            cfg["device_id"] = device.id
            self.context.config.save(cfg)
        except ConfigIOError as exc:
            return self.fail(f"Failed to set device to {device.name}: {exc}")
        self.context.settings.device_id = device.id
        logger.info("Default device set to %s", device.name)

        try:
            self.context.require_service().transfer_playback(device.id)
        except PickifyError as exc:
            return self.fail(f"Failed to switch playback to {device.name}: {exc}")

        self.context.notifier.notify(f"Device set to {device.name}")
        return Exit()


def resolve_device_id(context: AppContext) -> Optional[str]:
    """Return the device transport actions should target.

    The configured default wins. Without one the user picks a device once;
    if that still leaves nothing configured, None lets Spotify use its
    currently active device.
    """
    try:
        device_id = context.configured_device_id()
    except ConfigIOError as exc:
        context.notifier.error(f"Failed to load device id from config: {exc}")
        return None
    if device_id:
        return device_id

    logger.info("No default device configured, asking for one")
    try:
        devices = context.require_service().devices()
    except PickifyError as exc:
        context.notifier.error(f"Failed to get devices: {exc}")
        return None
    if not devices:
        context.notifier.error("No Spotify devices available")
        return None

    DeviceSelectionScreen(context, devices).select()

    try:
        return context.configured_device_id()
    except ConfigIOError as exc:
        context.notifier.error(f"Failed to load device id from config: {exc}")
        return None
