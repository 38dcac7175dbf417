"""Tests for the MCP server wiring, settings and logging setup."""

import logging
import sys

import pytest

from cuebridge_link.backends import AppleScriptBackend, MidiBackend, OscBackend
from cuebridge_mcp.config import Settings
from cuebridge_mcp.logging_setup import LOG_FORMAT, configure_logging
from cuebridge_mcp.server import create_dispatcher, create_server

TOOLS = {
    "connect",
    "disconnect",
    "status",
    "transport",
    "mixer",
    "track",
    "feedback_status",
    "setup_guide",
    "get_project_info",
    "setup_midi_learn",
}


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("BACKEND", "OSC_PORT", "FEEDBACK_TIMEOUT_MS"):
            monkeypatch.delenv(f"CUEBRIDGE_{name}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.backend == "midi"
        assert settings.midi_port_match == "IAC"
        assert settings.osc_host == "127.0.0.1"
        assert settings.osc_port == 7000
        assert settings.osc_feedback_port == 8000
        assert settings.app_name == "Logic Pro"
        assert settings.feedback_timeout_ms == 3000
        assert settings.transport_grace_ms == 500
        assert settings.mixer_grace_ms == 1000

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("CUEBRIDGE_BACKEND", "osc")
        monkeypatch.setenv("CUEBRIDGE_OSC_FEEDBACK_PORT", "0")
        monkeypatch.setenv("CUEBRIDGE_FEEDBACK_TIMEOUT_MS", "1500")

        settings = Settings(_env_file=None)

        assert settings.backend == "osc"
        assert settings.osc_feedback_port == 0
        assert settings.feedback_timeout_ms == 1500

    def test_invalid_backend(self, monkeypatch):
        monkeypatch.setenv("CUEBRIDGE_BACKEND", "serial")

        with pytest.raises(ValueError):
            Settings(_env_file=None)

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CUEBRIDGE_APP_NAME", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("CUEBRIDGE_APP_NAME=Logic Pro X\n", encoding="utf-8")

        assert Settings(_env_file=env_file).app_name == "Logic Pro X"


class TestCreateDispatcher:

    def test_midi_backend(self):
        dispatcher = create_dispatcher(Settings(_env_file=None, backend="midi"))

        assert isinstance(dispatcher.context.backend, MidiBackend)
        assert dispatcher.context.ledger.default_timeout_ms == 3000

    def test_osc_backend(self):
        dispatcher = create_dispatcher(Settings(_env_file=None, backend="osc", osc_feedback_port=0))

        assert isinstance(dispatcher.context.backend, OscBackend)
        assert dispatcher.context.backend.has_feedback is False

    def test_applescript_backend(self):
        dispatcher = create_dispatcher(Settings(_env_file=None, backend="applescript", app_name="Logic Pro X"))

        assert isinstance(dispatcher.context.backend, AppleScriptBackend)
        assert dispatcher.context.app_name == "Logic Pro X"

    def test_grace_and_timeout(self):
        settings = Settings(
            _env_file=None, feedback_timeout_ms=800, transport_grace_ms=100, mixer_grace_ms=200
        )
        context = create_dispatcher(settings).context

        assert context.ledger.default_timeout_ms == 800
        assert context.transport_grace_ms == 100
        assert context.mixer_grace_ms == 200

    def test_mixer_map_file(self, tmp_path):
        path = tmp_path / "mixer.yaml"
        path.write_text("mixer:\n  global_channel: 9\n", encoding="utf-8")

        context = create_dispatcher(Settings(_env_file=None, mixer_map_file=path)).context

        assert context.backend.profile.mixer_map.global_channel == 9


class TestServer:

    @pytest.mark.asyncio
    async def test_tools_registered(self):
        mcp = create_server(create_dispatcher(Settings(_env_file=None)))

        tools = await mcp.list_tools()

        assert {tool.name for tool in tools} == TOOLS

    @pytest.mark.asyncio
    async def test_transport_schema(self):
        mcp = create_server(create_dispatcher(Settings(_env_file=None)))

        tools = {tool.name: tool for tool in await mcp.list_tools()}
        schema = tools["transport"].inputSchema

        assert set(schema["properties"]) == {"action", "position"}
        assert schema["required"] == ["action"]

    @pytest.mark.asyncio
    async def test_tool_names_match_dispatcher(self):
        dispatcher = create_dispatcher(Settings(_env_file=None))
        mcp = create_server(dispatcher)

        assert {tool.name for tool in await mcp.list_tools()} == set(dispatcher.tool_names)


class TestLogging:

    def test_configure_logging_to_stderr(self):
        root = logging.getLogger()
        saved = (list(root.handlers), root.level)
        try:
            configure_logging("debug")

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            handler = root.handlers[0]
            assert handler.stream is sys.stderr
            assert handler.formatter._fmt == LOG_FORMAT
        finally:
            root.handlers[:] = saved[0]
            root.setLevel(saved[1])

    def test_unknown_level_falls_back_to_info(self):
        root = logging.getLogger()
        saved = (list(root.handlers), root.level)
        try:
            configure_logging("chatty")
            assert root.level == logging.INFO
        finally:
            root.handlers[:] = saved[0]
            root.setLevel(saved[1])
