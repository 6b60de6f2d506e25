"""Bounded context: Navigation

As a user without a default device, I am asked once which device to use.
"""

from pickify.navigation.screens.device import resolve_device_id


def test_configured_device_is_used_without_remote_calls(context, service, launcher):
    assert resolve_device_id(context) == "dev-desk"
    assert service.calls == []
    assert launcher.shown == []


def test_device_changed_by_another_run_is_picked_up(context, config):
    config.save({"device_id": "dev-phone"})

    assert resolve_device_id(context) == "dev-phone"
    assert context.settings.device_id == "dev-phone"


def test_missing_default_prompts_once_and_uses_the_pick(context, config, service, launcher, devices):
    config.save({})
    service.device_list = devices
    launcher.responses = ["1: Phone"]

    assert resolve_device_id(context) == "dev-phone"
    assert len(launcher.shown) == 1
    assert launcher.shown[0][1] == "Select Device"


def test_cancelled_prompt_leaves_the_choice_to_spotify(context, config, service, launcher, notifier, devices):
    config.save({})
    service.device_list = devices

    assert resolve_device_id(context) is None
    assert len(launcher.shown) == 1
    assert notifier.errors == []


def test_no_devices_is_reported(context, config, service, launcher, notifier):
    config.save({})

    assert resolve_device_id(context) is None
    assert launcher.shown == []
    assert notifier.errors == ["No Spotify devices available"]


def test_device_listing_failure_is_reported(context, config, service, notifier):
    config.save({})
    service.failing.add("devices")

    assert resolve_device_id(context) is None
    assert notifier.errors[0].startswith("Failed to get devices")
