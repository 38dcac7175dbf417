"""Tests for AppleScriptBackend and the osascript runner."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from mocks import MockScriptRunner

from cuebridge_core.errors import ChannelFailure, NotConnected, RemoteUnreachable
from cuebridge_core.wire import MidiMessage, ScriptMessage
from cuebridge_link.backends import AppleScriptBackend
from cuebridge_link.host import run_osascript


class TestAppleScriptBackend:

    @pytest.mark.asyncio
    async def test_connect_checks_app_running(self):
        runner = MockScriptRunner(output="true")
        backend = AppleScriptBackend(runner=runner, check_host=False)

        assert await backend.open_output() == "Logic Pro"
        assert backend.is_output_open is True
        assert runner.scripts == ['return application "Logic Pro" is running']

    @pytest.mark.asyncio
    async def test_connect_app_not_running(self):
        backend = AppleScriptBackend(runner=MockScriptRunner(output="false"), check_host=False)

        with pytest.raises(RemoteUnreachable, match="Logic Pro is not running"):
            await backend.open_output()
        assert backend.is_output_open is False

    @pytest.mark.asyncio
    async def test_connect_without_osascript(self):
        backend = AppleScriptBackend(runner=MockScriptRunner(output="true"))

        with patch("cuebridge_link.backends.script_backend.shutil.which", return_value=None):
            with pytest.raises(ChannelFailure, match="osascript not available"):
                await backend.open_output()

    @pytest.mark.asyncio
    async def test_no_feedback_channel(self):
        backend = AppleScriptBackend(runner=MockScriptRunner())

        assert backend.has_feedback is False
        assert await backend.open_input(MagicMock()) is None

    @pytest.mark.asyncio
    async def test_send_runs_script(self):
        runner = MockScriptRunner(output="true")
        backend = AppleScriptBackend(app_name="Logic Pro X", runner=runner, check_host=False)
        await backend.open_output()

        await backend.send(ScriptMessage('tell application "Logic Pro X" to activate'))

        assert runner.scripts[-1] == 'tell application "Logic Pro X" to activate'

    @pytest.mark.asyncio
    async def test_send_before_connect(self):
        backend = AppleScriptBackend(runner=MockScriptRunner())

        with pytest.raises(NotConnected):
            await backend.send(ScriptMessage("beep"))

    @pytest.mark.asyncio
    async def test_send_wrong_type(self):
        backend = AppleScriptBackend(runner=MockScriptRunner(output="true"), check_host=False)
        await backend.open_output()

        with pytest.raises(TypeError):
            await backend.send(MidiMessage.control_change(0, 7, 1))

    @pytest.mark.asyncio
    async def test_close(self):
        backend = AppleScriptBackend(runner=MockScriptRunner(output="true"), check_host=False)
        await backend.open_output()

        backend.close_output()
        backend.close_input()

        assert backend.is_output_open is False


def fake_process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> MagicMock:
    proc = MagicMock()
    proc.communicate = AsyncMock(return_value=(stdout, stderr))
    proc.wait = AsyncMock(return_value=returncode)
    proc.returncode = returncode
    return proc


class TestRunOsascript:

    @pytest.mark.asyncio
    async def test_returns_stdout(self):
        proc = fake_process(stdout=b"true\n")
        with patch("cuebridge_link.host.asyncio.create_subprocess_exec", AsyncMock(return_value=proc)) as spawn:
            assert await run_osascript("return 1") == "true"

        assert spawn.call_args[0][:3] == ("osascript", "-e", "return 1")

    @pytest.mark.asyncio
    async def test_missing_osascript(self):
        spawn = AsyncMock(side_effect=FileNotFoundError("osascript"))
        with patch("cuebridge_link.host.asyncio.create_subprocess_exec", spawn):
            with pytest.raises(ChannelFailure, match="osascript not available"):
                await run_osascript("return 1")

    @pytest.mark.asyncio
    async def test_app_not_running(self):
        proc = fake_process(
            stderr=b"execution error: Logic Pro got an error: Application isn't running. (-600)",
            returncode=1,
        )
        with patch("cuebridge_link.host.asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(RemoteUnreachable):
                await run_osascript("tell application \"Logic Pro\" to activate")

    @pytest.mark.asyncio
    async def test_script_error(self):
        proc = fake_process(stderr=b"syntax error: Expected end of line. (-2741)", returncode=1)
        with patch("cuebridge_link.host.asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(ChannelFailure, match="AppleScript failed"):
                await run_osascript("tell")

    @pytest.mark.asyncio
    async def test_timeout(self):
        proc = fake_process()

        async def hang():
            await asyncio.sleep(10)

        proc.communicate = hang
        with patch("cuebridge_link.host.asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(RemoteUnreachable, match="timed out"):
                await run_osascript("delay 60", timeout=0.01)

        proc.kill.assert_called_once()
