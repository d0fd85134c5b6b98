"""Tests for toast rendering and platform resource handling."""

import xml.etree.ElementTree as ET

import pytest

from telegram_toast_agent.config import ToastConfig
from telegram_toast_agent.exceptions import InitializationError, RenderError
from telegram_toast_agent.toast_notifier import (
    WINDOWS_TOASTS_AVAILABLE,
    RenderStep,
    build_toast_xml,
    show_notification,
)

from conftest import FakePlatform


def test_build_toast_xml_layout():
    toast = ET.fromstring(build_toast_xml("New Message", "body text", "https://x.example/?a=1&b=2"))

    texts = [t.text for t in toast.findall("./visual/binding/text")]
    assert toast.find("./visual/binding").get("template") == "ToastGeneric"
    assert texts == ["New Message", "body text"]

    actions = toast.findall("./actions/action")
    assert len(actions) == 1
    assert actions[0].get("content") == "Open browser"
    assert actions[0].get("arguments") == "https://x.example/?a=1&b=2"
    assert actions[0].get("activationType") == "protocol"


def test_build_toast_xml_escapes_markup_in_text():
    toast = ET.fromstring(build_toast_xml("<b>", "a & b </text>", "https://x.example/'\""))

    assert [t.text for t in toast.findall("./visual/binding/text")] == ["<b>", "a & b </text>"]
    assert toast.find("./actions/action").get("arguments") == "https://x.example/'\""


def test_show_notification_success_releases_everything():
    platform = FakePlatform()

    show_notification("t", "b", "https://x.example", ToastConfig(app_id="My.App"), platform)

    assert platform.initialized == 1
    assert platform.uninitialized == 1
    assert len(platform.acquired) == 4
    assert sorted(map(id, platform.released)) == sorted(map(id, platform.acquired))
    assert platform.app_id == "My.App"
    assert platform.shown == [build_toast_xml("t", "b", "https://x.example")]


def test_handles_are_released_in_reverse_order():
    platform = FakePlatform()

    show_notification("t", "b", "https://x.example", platform=platform)

    assert platform.released == list(reversed(platform.acquired))


@pytest.mark.parametrize("step", list(RenderStep))
def test_failing_step_raises_render_error_and_releases(step):
    platform = FakePlatform(fail_at=step)

    with pytest.raises(RenderError) as excinfo:
        show_notification("t", "b", "https://x.example", platform=platform)

    assert excinfo.value.step is step
    assert isinstance(excinfo.value.__cause__, OSError)
    assert platform.shown == []
    assert sorted(map(id, platform.released)) == sorted(map(id, platform.acquired))
    assert platform.uninitialized == 1


def test_initialization_failure_raises_initialization_error():
    platform = FakePlatform(fail_init=True)

    with pytest.raises(InitializationError):
        show_notification("t", "b", "https://x.example", platform=platform)

    assert platform.acquired == []
    assert platform.released == []
    assert platform.uninitialized == 0


@pytest.mark.skipif(WINDOWS_TOASTS_AVAILABLE, reason="Windows toast libraries are installed")
def test_default_platform_without_windows_libraries():
    with pytest.raises(InitializationError, match="not installed"):
        show_notification("t", "b", "https://x.example")
