"""Tests for OscBackend with python-osc patched out."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from mocks import ManualTimer

from cuebridge_core.errors import ChannelFailure, NotConnected, RemoteUnreachable
from cuebridge_core.wire import MidiMessage, OscMessage
from cuebridge_link import FeedbackListener, PendingLedger, ToolDispatcher, create_context
from cuebridge_link.backends import OscBackend


@pytest.fixture
def fake_client():
    with patch("cuebridge_link.backends.osc_backend.udp_client") as m:
        yield m


@pytest.fixture
def fake_server():
    """Patch the asyncio OSC server and dispatcher; exposes the transport mock."""
    with patch("cuebridge_link.backends.osc_backend.osc_server") as server_mod, \
            patch("cuebridge_link.backends.osc_backend.dispatcher") as dispatcher_mod:
        transport = MagicMock()
        server = MagicMock()
        server.create_serve_endpoint = AsyncMock(return_value=(transport, MagicMock()))
        server_mod.AsyncIOOSCUDPServer.return_value = server
        server_mod.transport = transport
        server_mod.server = server
        server_mod.dispatcher = dispatcher_mod.Dispatcher.return_value
        yield server_mod


class TestOutput:

    @pytest.mark.asyncio
    async def test_open_output(self, fake_client):
        backend = OscBackend(host="10.0.0.2", port=7001)

        name = await backend.open_output()

        assert name == "10.0.0.2:7001"
        fake_client.SimpleUDPClient.assert_called_once_with("10.0.0.2", 7001)
        assert backend.is_output_open is True

    @pytest.mark.asyncio
    async def test_open_output_unreachable(self, fake_client):
        fake_client.SimpleUDPClient.side_effect = OSError("Name or service not known")

        with pytest.raises(RemoteUnreachable):
            await OscBackend(host="nowhere").open_output()

    @pytest.mark.asyncio
    async def test_close_output_closes_socket(self, fake_client):
        backend = OscBackend()
        await backend.open_output()

        backend.close_output()
        backend.close_output()

        fake_client.SimpleUDPClient.return_value.close.assert_called_once()
        assert backend.is_output_open is False

    @pytest.mark.asyncio
    async def test_send(self, fake_client):
        backend = OscBackend()
        await backend.open_output()

        await backend.send(OscMessage("/track/3/volume", (0.5,)))

        fake_client.SimpleUDPClient.return_value.send_message.assert_called_once_with(
            "/track/3/volume", [0.5]
        )

    @pytest.mark.asyncio
    async def test_send_not_connected(self):
        with pytest.raises(NotConnected):
            await OscBackend().send(OscMessage("/transport/play", (1.0,)))

    @pytest.mark.asyncio
    async def test_send_failure(self, fake_client):
        backend = OscBackend()
        await backend.open_output()
        fake_client.SimpleUDPClient.return_value.send_message.side_effect = OSError("unreachable")

        with pytest.raises(ChannelFailure):
            await backend.send(OscMessage("/transport/play", (1.0,)))

    @pytest.mark.asyncio
    async def test_send_wrong_type(self, fake_client):
        backend = OscBackend()
        await backend.open_output()

        with pytest.raises(TypeError):
            await backend.send(MidiMessage.control_change(0, 7, 1))

    def test_describe(self):
        assert OscBackend().describe(OscMessage("/transport/play", (1.0,))) == "OSC /transport/play"


class TestFeedbackServer:

    def test_feedback_port_zero_disables(self):
        assert OscBackend(feedback_port=0).has_feedback is False
        assert OscBackend().has_feedback is True

    @pytest.mark.asyncio
    async def test_open_input_routes_to_listener(self, fake_server):
        ledger = PendingLedger(ManualTimer())
        listener = FeedbackListener(ledger)
        ledger.register("osc:/track/1/mute")
        backend = OscBackend(feedback_port=9001)

        name = await backend.open_input(listener)

        assert name == "0.0.0.0:9001"
        assert backend.is_input_open is True
        handler = fake_server.dispatcher.set_default_handler.call_args[0][0]
        handler("/track/1/mute", 1.0)
        assert "osc:/track/1/mute" not in ledger

    @pytest.mark.asyncio
    async def test_open_input_disabled(self, fake_server):
        backend = OscBackend(feedback_port=0)

        assert await backend.open_input(FeedbackListener(PendingLedger(ManualTimer()))) is None
        fake_server.AsyncIOOSCUDPServer.assert_not_called()

    @pytest.mark.asyncio
    async def test_port_in_use(self, fake_server):
        fake_server.server.create_serve_endpoint.side_effect = OSError("Address already in use")
        backend = OscBackend(feedback_port=9001)

        with pytest.raises(ChannelFailure, match="9001"):
            await backend.open_input(FeedbackListener(PendingLedger(ManualTimer())))
        assert backend.is_input_open is False

    @pytest.mark.asyncio
    async def test_close_input(self, fake_server):
        backend = OscBackend(feedback_port=9001)
        await backend.open_input(FeedbackListener(PendingLedger(ManualTimer())))

        backend.close_input()

        fake_server.transport.close.assert_called_once()
        assert backend.is_input_open is False


@pytest.mark.asyncio
async def test_osc_scenario(fake_client, fake_server):
    """connect -> transport -> echoed reply acknowledges during the grace wait."""
    timer = ManualTimer()
    context = create_context(OscBackend(), timer=timer)
    dispatcher = ToolDispatcher(context)

    connect_text = await dispatcher.call_text("connect")
    handler = fake_server.dispatcher.set_default_handler.call_args[0][0]
    timer.on_sleep = lambda: handler("/transport/play", 1.0)
    play_text = await dispatcher.call_text("transport", {"action": "play"})

    assert "Output: 127.0.0.1:7000" in connect_text
    assert "Input: 0.0.0.0:8000" in connect_text
    assert play_text == "Transport: play (via OSC /transport/play) - Command acknowledged"
