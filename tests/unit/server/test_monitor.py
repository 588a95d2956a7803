"""Tests for the AI monitor client registry and broadcaster."""

import asyncio
import json

import pytest

from singularis.server.monitor import (
    AIMonitor,
    MessageType,
    MonitorClient,
    SubscriptionChannel,
    get_monitor,
    permissions_for_role,
    set_monitor,
)


class FakeWebSocket:
    """Collects everything sent to it."""

    def __init__(self, *, fail: bool = False, delay: float = 0.0) -> None:
        self.sent: list[dict] = []
        self.fail = fail
        self.delay = delay
        self.close_code: int | None = None

    async def send_json(self, message: dict) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.close_code = code

    def types(self) -> list[str]:
        return [m["type"] for m in self.sent]


async def connected(monitor: AIMonitor, **kwargs) -> tuple[MonitorClient, FakeWebSocket]:
    ws = FakeWebSocket(**kwargs)
    client = await monitor.connect(ws)
    assert client is not None
    return client, ws


async def send(monitor: AIMonitor, client: MonitorClient, type: str, data=None, id=None) -> None:
    message = {"type": type, "data": data or {}}
    if id is not None:
        message["id"] = id
    await monitor.handle_message(client, json.dumps(message))


class TestPermissions:
    def test_roles(self):
        assert "manage_system" in permissions_for_role("admin")
        assert permissions_for_role("reviewer") == ("view_oversight", "view_system_status")

    def test_unknown_role_is_viewer(self):
        assert permissions_for_role("intern") == ("view_system_status",)


class TestConnect:
    @pytest.mark.asyncio
    async def test_connection_status(self):
        monitor = AIMonitor()
        client, ws = await connected(monitor)

        [status] = ws.sent
        assert status["type"] == "connection_status"
        assert status["data"]["clientId"] == client.id
        assert status["data"]["authRequired"] is True
        assert "audit_trail" in status["data"]["availableChannels"]
        assert isinstance(status["timestamp"], int)
        assert client.is_authenticated is False
        assert monitor.client_count == 1

    @pytest.mark.asyncio
    async def test_open_monitor_authenticates_on_connect(self):
        client, _ = await connected(AIMonitor(auth_required=False))
        assert client.is_authenticated is True

    @pytest.mark.asyncio
    async def test_capacity(self):
        monitor = AIMonitor(max_connections=1)
        await connected(monitor)
        assert await monitor.connect(FakeWebSocket()) is None
        assert monitor.client_count == 1

    @pytest.mark.asyncio
    async def test_disconnect(self):
        monitor = AIMonitor()
        client, _ = await connected(monitor)
        await monitor.disconnect(client)
        assert monitor.client_count == 0


class TestAuth:
    @pytest.mark.asyncio
    async def test_token_required(self):
        monitor = AIMonitor()
        client, ws = await connected(monitor)
        await send(monitor, client, "auth_request", {}, id="req-1")

        reply = ws.sent[-1]
        assert reply["type"] == "auth_failed"
        assert reply["data"] == {"reason": "Token required"}
        assert reply["correlationId"] == "req-1"
        assert client.is_authenticated is False

    @pytest.mark.asyncio
    async def test_success(self):
        monitor = AIMonitor()
        client, ws = await connected(monitor)
        await send(monitor, client, "auth_request", {"token": "t", "userId": "ada", "role": "supervisor"})

        reply = ws.sent[-1]
        assert reply["type"] == "auth_success"
        assert reply["data"]["userId"] == "ada"
        assert "manage_oversight" in reply["data"]["permissions"]
        assert client.is_authenticated is True
        assert monitor.authenticated_count == 1

    @pytest.mark.asyncio
    async def test_defaults_when_auth_not_required(self):
        monitor = AIMonitor(auth_required=False)
        client, ws = await connected(monitor)
        await send(monitor, client, "auth_request")
        assert ws.sent[-1]["data"]["userId"] == "anonymous"
        assert client.role == "viewer"


class TestProtocolErrors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["not json", "[1, 2]"])
    async def test_parse_error(self, raw):
        monitor = AIMonitor()
        client, ws = await connected(monitor)
        await monitor.handle_message(client, raw)
        assert ws.sent[-1]["data"] == {"message": "Invalid message format", "code": "MESSAGE_PARSE_ERROR"}

    @pytest.mark.asyncio
    async def test_unknown_type(self):
        monitor = AIMonitor()
        client, ws = await connected(monitor)
        await send(monitor, client, "dance", id="x")
        reply = ws.sent[-1]
        assert reply["data"]["code"] == "UNKNOWN_MESSAGE_TYPE"
        assert reply["data"]["message"] == "Unknown message type: dance"
        assert reply["correlationId"] == "x"


class TestSubscribe:
    @pytest.mark.asyncio
    async def test_channels_must_be_list(self):
        monitor = AIMonitor()
        client, ws = await connected(monitor)
        await send(monitor, client, "subscribe", {"channels": "all"})
        assert ws.sent[-1]["data"]["code"] == "INVALID_SUBSCRIPTION"

    @pytest.mark.asyncio
    async def test_no_valid_channels(self):
        monitor = AIMonitor()
        client, ws = await connected(monitor)
        await send(monitor, client, "subscribe", {"channels": ["gossip"]})
        assert ws.sent[-1]["data"]["code"] == "NO_VALID_CHANNELS"

    @pytest.mark.asyncio
    async def test_permission_denied(self):
        monitor = AIMonitor()
        client, ws = await connected(monitor)
        await send(monitor, client, "auth_request", {"token": "t", "role": "viewer"})
        await send(monitor, client, "subscribe", {"channels": ["audit_trail"]})
        assert ws.sent[-1]["data"]["code"] == "PERMISSION_DENIED"

    @pytest.mark.asyncio
    async def test_partial_grant_and_initial_status(self):
        monitor = AIMonitor()
        client, ws = await connected(monitor)
        await send(monitor, client, "auth_request", {"token": "t", "role": "reviewer"})
        await send(
            monitor, client, "subscribe",
            {"channels": ["verification_events", "audit_trail", "oversight_requests"]},
        )

        confirmed, *initial = ws.sent[-3:]
        assert confirmed["type"] == "subscription_confirmed"
        assert confirmed["data"] == {
            "subscribed": ["verification_events", "oversight_requests"],
            "rejected": ["audit_trail"],
        }
        assert [m["type"] for m in initial] == ["verification_status", "oversight_status"]
        assert initial[0]["data"]["connectedClients"] == 1

    @pytest.mark.asyncio
    async def test_unsubscribe(self):
        monitor = AIMonitor(auth_required=False)
        client, ws = await connected(monitor)
        await send(monitor, client, "subscribe", {"channels": ["verification_events"]})
        await send(monitor, client, "unsubscribe", {"channels": ["verification_events"]})
        assert ws.sent[-1]["data"] == {"unsubscribed": ["verification_events"]}
        assert client.subscriptions == set()


class TestBroadcast:
    @pytest.mark.asyncio
    async def test_reaches_only_authenticated_subscribers(self):
        monitor = AIMonitor()
        subscriber, sub_ws = await connected(monitor)
        await send(monitor, subscriber, "auth_request", {"token": "t", "role": "admin"})
        await send(monitor, subscriber, "subscribe", {"channels": ["audit_trail"]})
        everything, all_ws = await connected(monitor)
        await send(monitor, everything, "auth_request", {"token": "t", "role": "admin"})
        await send(monitor, everything, "subscribe", {"channels": ["all"]})
        anonymous, anon_ws = await connected(monitor)

        sent = await monitor.broadcast(
            SubscriptionChannel.AUDIT_TRAIL, MessageType.AUDIT_ENTRY, {"action": "test"}
        )

        assert sent == 2
        event = sub_ws.sent[-1]
        assert event["type"] == "audit_entry"
        assert event["data"] == {"action": "test"}
        assert event["id"].startswith("msg_")
        assert all_ws.sent[-1]["id"] == event["id"]
        assert "audit_entry" not in anon_ws.types()

    @pytest.mark.asyncio
    async def test_all_still_respects_permissions(self):
        monitor = AIMonitor()
        client, ws = await connected(monitor)
        await send(monitor, client, "auth_request", {"token": "t", "role": "viewer"})
        await send(monitor, client, "subscribe", {"channels": ["all"]})
        sent = await monitor.broadcast(
            SubscriptionChannel.AUDIT_TRAIL, MessageType.AUDIT_ENTRY, {}
        )
        assert sent == 0

    @pytest.mark.asyncio
    async def test_dead_clients_dropped(self):
        monitor = AIMonitor(auth_required=False)
        client, ws = await connected(monitor)
        await send(monitor, client, "subscribe", {"channels": ["verification_events"]})
        ws.fail = True

        sent = await monitor.broadcast(
            SubscriptionChannel.VERIFICATION_EVENTS, MessageType.VERIFICATION_EVENT, {}
        )
        assert sent == 0
        assert monitor.client_count == 0
        assert monitor.statistics.total_verification_events == 1
        assert ws.close_code == 1011
        assert monitor.is_connected(client) is False

    @pytest.mark.asyncio
    async def test_slow_clients_dropped(self):
        monitor = AIMonitor(auth_required=False, send_timeout=0.01)
        client, ws = await connected(monitor)
        await send(monitor, client, "subscribe", {"channels": ["all"]})
        ws.delay = 0.5

        sent = await monitor.broadcast(
            SubscriptionChannel.VERIFICATION_EVENTS, MessageType.VERIFICATION_EVENT, {}
        )
        assert sent == 0
        assert monitor.client_count == 0


class TestGlobalMonitor:
    def test_built_from_config(self, monkeypatch):
        monkeypatch.setenv("SINGULARIS_MONITOR_MAX_CONNECTIONS", "3")
        set_monitor(None)
        try:
            assert get_monitor().max_connections == 3
            assert get_monitor().heartbeat_interval == 30.0
            assert get_monitor() is get_monitor()
        finally:
            set_monitor(None)


class TestDroppedClients:
    @pytest.mark.asyncio
    async def test_dropped_client_frees_its_slot(self):
        monitor = AIMonitor(auth_required=False, max_connections=1)
        first, first_ws = await connected(monitor)
        await send(monitor, first, "subscribe", {"channels": ["verification_events"]})
        first_ws.fail = True
        await monitor.broadcast(
            SubscriptionChannel.VERIFICATION_EVENTS, MessageType.VERIFICATION_EVENT, {}
        )
        first_ws.fail = False

        second, second_ws = await connected(monitor)
        await send(monitor, second, "subscribe", {"channels": ["verification_events"]})

        assert first_ws.close_code == 1011
        assert monitor.is_connected(first) is False
        assert monitor.client_count == 1
        sent = await monitor.broadcast(
            SubscriptionChannel.VERIFICATION_EVENTS, MessageType.VERIFICATION_EVENT, {}
        )
        assert sent == 1
        assert second_ws.types()[-1] == "verification_event"

    @pytest.mark.asyncio
    async def test_close_failure_still_drops(self):
        class BrokenClose(FakeWebSocket):
            async def close(self, code: int = 1000, reason: str | None = None) -> None:
                raise RuntimeError("already closed")

        monitor = AIMonitor(auth_required=False)
        client = await monitor.connect(BrokenClose())
        await send(monitor, client, "subscribe", {"channels": ["all"]})
        client.websocket.fail = True

        await monitor.broadcast(
            SubscriptionChannel.VERIFICATION_EVENTS, MessageType.VERIFICATION_EVENT, {}
        )
        assert monitor.client_count == 0


class TestHeartbeat:
    @pytest.mark.asyncio
    async def test_sweep_closes_idle_clients(self):
        monitor = AIMonitor(heartbeat_interval=30)
        idle, idle_ws = await connected(monitor)
        active, active_ws = await connected(monitor)
        now = active.last_activity
        idle.last_activity = now - 61_000
        active.last_activity = now - 59_000

        assert await monitor.sweep_stale(now_ms=now) == 1
        assert idle_ws.close_code == 1001
        assert active_ws.close_code is None
        assert monitor.is_connected(idle) is False
        assert monitor.is_connected(active) is True

    @pytest.mark.asyncio
    async def test_client_messages_keep_connection_alive(self):
        monitor = AIMonitor(heartbeat_interval=30)
        client, ws = await connected(monitor)
        client.last_activity = 0
        await send(monitor, client, "subscribe", {"channels": ["verification_events"]})

        assert await monitor.sweep_stale() == 0
        assert ws.close_code is None

    @pytest.mark.asyncio
    async def test_background_sweep(self):
        monitor = AIMonitor(heartbeat_interval=0.01)
        client, ws = await connected(monitor)
        client.last_activity = 0

        monitor.start_heartbeat()
        try:
            for _ in range(100):
                if ws.close_code is not None:
                    break
                await asyncio.sleep(0.01)
        finally:
            await monitor.stop_heartbeat()

        assert ws.close_code == 1001
        assert monitor.client_count == 0

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        await AIMonitor().stop_heartbeat()
