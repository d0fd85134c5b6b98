"""Windows toast notification module."""

import logging
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from contextlib import ExitStack
from enum import Enum
from typing import Any, Callable, Optional

from .config import ToastConfig
from .exceptions import InitializationError, RenderError

logger = logging.getLogger(__name__)

try:
    import pythoncom
    from winrt.windows.ui.notifications import (
        ToastNotification,
        ToastNotificationManager,
        ToastTemplateType,
    )
    WINDOWS_TOASTS_AVAILABLE = True
except ImportError:
    WINDOWS_TOASTS_AVAILABLE = False
    logger.debug("pywin32/winrt not installed; Windows toasts unavailable")

ACTION_LABEL = "Open browser"


class RenderStep(str, Enum):
    """Steps of building and submitting a toast, in order."""
    MANAGER = "manager"
    INTERFACE = "interface"
    NOTIFIER = "notifier"
    TEMPLATE_CONTENT = "template_content"
    SET_CONTENT = "set_content"
    SHOW = "show"


class ToastPlatform(ABC):
    """Native notification subsystem, one method per rendering step."""

    @abstractmethod
    def initialize(self) -> None:
        """Set up the subsystem. Paired with ``uninitialize``."""

    @abstractmethod
    def uninitialize(self) -> None:
        pass

    @abstractmethod
    def get_manager(self) -> Any:
        pass

    @abstractmethod
    def get_interface(self, manager: Any) -> Any:
        pass

    @abstractmethod
    def get_notifier(self, interface: Any, app_id: str) -> Any:
        pass

    @abstractmethod
    def get_template_content(self, manager: Any) -> Any:
        pass

    @abstractmethod
    def set_content(self, content: Any, toast_xml: str) -> None:
        pass

    @abstractmethod
    def show(self, notifier: Any, content: Any) -> None:
        pass

    @abstractmethod
    def release(self, handle: Any) -> None:
        """Release a handle returned by one of the ``get_*`` methods."""


class WindowsToastPlatform(ToastPlatform):
    """Toasts through the WinRT ``Windows.UI.Notifications`` API."""

    def __init__(self):
        self._held = []

    def _hold(self, handle: Any) -> Any:
        self._held.append(handle)
        return handle

    def initialize(self) -> None:
        if not WINDOWS_TOASTS_AVAILABLE:
            raise ImportError(
                "Windows toast libraries not installed. Install with: "
                "pip install pywin32 winrt-Windows.UI.Notifications winrt-Windows.Data.Xml.Dom"
            )
        # winrt projections run in the multithreaded apartment
        pythoncom.CoInitializeEx(pythoncom.COINIT_MULTITHREADED)

    def uninitialize(self) -> None:
        pythoncom.CoUninitialize()

    def get_manager(self) -> Any:
        # Static interface of the toast manager (templates, notifier factory)
        return self._hold(ToastNotificationManager)

    def get_interface(self, manager: Any) -> Any:
        # Per-user manager interface
        return self._hold(manager.get_default())

    def get_notifier(self, interface: Any, app_id: str) -> Any:
        return self._hold(interface.create_toast_notifier(app_id))

    def get_template_content(self, manager: Any) -> Any:
        return self._hold(manager.get_template_content(ToastTemplateType.TOAST_TEXT02))

    def set_content(self, content: Any, toast_xml: str) -> None:
        content.load_xml(toast_xml)

    def show(self, notifier: Any, content: Any) -> None:
        notifier.show(ToastNotification(content))

    def release(self, handle: Any) -> None:
        # WinRT references must be dropped before the apartment is torn down.
        self._held.remove(handle)


def build_toast_xml(title: str, body: str, url: str) -> str:
    """
    Build the toast document: two text lines and one button opening ``url``.

    Activation uses the ``protocol`` type, which hands the URL to the
    system's default handler in the foreground.
    """
    toast = ET.Element("toast", {"activationType": "protocol", "launch": url})
    visual = ET.SubElement(toast, "visual")
    binding = ET.SubElement(visual, "binding", {"template": "ToastGeneric"})
    ET.SubElement(binding, "text").text = title
    ET.SubElement(binding, "text").text = body

    actions = ET.SubElement(toast, "actions")
    ET.SubElement(
        actions,
        "action",
        {"content": ACTION_LABEL, "arguments": url, "activationType": "protocol"},
    )
    return ET.tostring(toast, encoding="unicode")


def _run_step(step: RenderStep, func: Callable[..., Any], *args: Any) -> Any:
    try:
        return func(*args)
    except Exception as e:
        raise RenderError(f"Toast step '{step.value}' failed: {e}", step) from e


def _acquire(
    stack: ExitStack,
    platform: ToastPlatform,
    step: RenderStep,
    func: Callable[..., Any],
    *args: Any,
) -> Any:
    handle = _run_step(step, func, *args)
    stack.callback(platform.release, handle)
    return handle


def _display(platform: ToastPlatform, stack: ExitStack, toast_xml: str, app_id: str) -> None:
    manager = _acquire(stack, platform, RenderStep.MANAGER, platform.get_manager)
    interface = _acquire(stack, platform, RenderStep.INTERFACE, platform.get_interface, manager)
    notifier = _acquire(
        stack, platform, RenderStep.NOTIFIER, platform.get_notifier, interface, app_id
    )
    content = _acquire(
        stack, platform, RenderStep.TEMPLATE_CONTENT, platform.get_template_content, manager
    )
    _run_step(RenderStep.SET_CONTENT, platform.set_content, content, toast_xml)
    _run_step(RenderStep.SHOW, platform.show, notifier, content)


def show_notification(
    title: str,
    body: str,
    url: str,
    config: Optional[ToastConfig] = None,
    platform: Optional[ToastPlatform] = None,
) -> None:
    """
    Display a toast with a title, a body and an "Open browser" button.

    Every acquired handle is released, and the subsystem uninitialized, on
    every exit path. ``url`` is not checked; an empty one gives a button
    that does nothing.

    Args:
        title: First text line.
        body: Second text line.
        url: Target of the action button.
        config: Toast configuration (app id).
        platform: Notification subsystem; defaults to the Windows one.

    Raises:
        InitializationError: If the subsystem cannot be initialized.
        RenderError: If a rendering step fails; ``step`` names it.
    """
    config = config or ToastConfig()
    platform = platform or WindowsToastPlatform()
    toast_xml = build_toast_xml(title, body, url)

    with ExitStack() as stack:
        try:
            platform.initialize()
        except Exception as e:
            raise InitializationError(f"Failed to initialize notification subsystem: {e}") from e
        stack.callback(platform.uninitialize)

        _display(platform, stack, toast_xml, config.app_id)

    logger.info(f"Toast notification shown for {url}")
