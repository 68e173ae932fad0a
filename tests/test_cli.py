"""Tests for the metis-mcp entry point."""

import logging

import pytest

from metis_mcp_core import cli
from metis_mcp_core.utils.config import MetisSettings
from metis_mcp_core.utils.logger import PACKAGE_LOGGER, setup_logger


class FakeServer:
    def __init__(self):
        self.transports = []

    def run(self, transport):
        self.transports.append(transport)


@pytest.fixture
def settings(monkeypatch):
    settings = MetisSettings(debug=True)
    monkeypatch.setattr(cli, "get_settings", lambda: settings)
    yield settings
    setup_logger(PACKAGE_LOGGER, level="INFO")


@pytest.mark.parametrize("name, server_name", [
    ("database", "database-tool"),
    ("vector-store", "vector-store-tool"),
    ("document", "document-processing-tool"),
    ("llm", "llm-interaction-tool"),
])
def test_create_server(settings, name, server_name):
    assert cli.create_server(name).name == server_name


def test_create_server_unknown_name(settings):
    with pytest.raises(ValueError, match="Unknown server: search"):
        cli.create_server("search")


def test_debug_reaches_module_loggers(settings, monkeypatch):
    server = FakeServer()
    monkeypatch.setattr(cli, "create_server", lambda name: server)

    cli.main(["document", "--transport", "sse"])

    assert server.transports == ["sse"]
    module_logger = logging.getLogger("metis_mcp_core.extractors.chunking")
    assert module_logger.getEffectiveLevel() == logging.DEBUG
