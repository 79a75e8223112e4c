"""Shared fixtures for the facade tests."""

from unittest.mock import MagicMock

import pytest

from screen_analytics import facade

CONFIG_ID = 0x7F0B0001


@pytest.fixture(autouse=True)
def _fresh_instance():
    facade.reset()
    yield
    facade.reset()


@pytest.fixture
def context():
    """Host context resolving every string id to ``res-<id>``."""
    ctx = MagicMock()
    ctx.get_application_context.return_value = ctx
    ctx.get_package_name.return_value = "com.example.app"
    ctx.get_identifier.return_value = CONFIG_ID

    def get_string(resource_id, *args):
        if args:
            return f"res-{resource_id}:" + ",".join(args)
        return f"res-{resource_id}"

    ctx.get_string.side_effect = get_string
    return ctx


@pytest.fixture
def missing_config_context(context):
    context.get_identifier.return_value = 0
    return context


@pytest.fixture
def tracker():
    return MagicMock()


@pytest.fixture
def provider(tracker):
    prov = MagicMock()
    prov.new_tracker.return_value = tracker
    return prov


@pytest.fixture
def config_id():
    return CONFIG_ID
