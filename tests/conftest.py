"""Shared fixtures and fakes for the toast agent tests."""

import json

import pytest
import requests

from telegram_toast_agent.config import AppConfig, TelegramConfig, ToastConfig
from telegram_toast_agent.toast_notifier import RenderStep, ToastPlatform


def make_response(body, status_code=200):
    """Build a real requests.Response carrying ``body`` (bytes, or JSON-able)."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    return response


class FakeSession:
    """Records GET calls and replays a canned response or exception."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


class FakePlatform(ToastPlatform):
    """Counting stand-in for the native notification subsystem."""

    def __init__(self, fail_at=None, fail_init=False):
        self.fail_at = fail_at
        self.fail_init = fail_init
        self.initialized = 0
        self.uninitialized = 0
        self.acquired = []
        self.released = []
        self.app_id = None
        self.loaded_xml = None
        self.shown = []

    def _step(self, step):
        if self.fail_at == step:
            raise OSError(f"{step.value} exploded")

    def _handle(self, step):
        self._step(step)
        handle = object()
        self.acquired.append(handle)
        return handle

    def initialize(self):
        if self.fail_init:
            raise OSError("CoInitialize failed")
        self.initialized += 1

    def uninitialize(self):
        self.uninitialized += 1

    def get_manager(self):
        return self._handle(RenderStep.MANAGER)

    def get_interface(self, manager):
        return self._handle(RenderStep.INTERFACE)

    def get_notifier(self, interface, app_id):
        self.app_id = app_id
        return self._handle(RenderStep.NOTIFIER)

    def get_template_content(self, manager):
        return self._handle(RenderStep.TEMPLATE_CONTENT)

    def set_content(self, content, toast_xml):
        self._step(RenderStep.SET_CONTENT)
        self.loaded_xml = toast_xml

    def show(self, notifier, content):
        self._step(RenderStep.SHOW)
        self.shown.append(self.loaded_xml)

    def release(self, handle):
        self.released.append(handle)


@pytest.fixture
def app_config():
    return AppConfig(
        telegram=TelegramConfig(bot_token="123:abc", api_base_url="https://api.example.test"),
        toast=ToastConfig(app_id="Test.App"),
    )
