"""AI monitoring channel served at ``/ws/ai-monitor``.

Streams verification, explainability, oversight, audit and system-status
events to connected WebSocket clients with:
- Role-based channel permissions
- Connection limits (prevents resource exhaustion)
- Backpressure handling (slow consumers dropped and closed)
- Heartbeat sweep (clients idle for two intervals closed with 1001)

Every message is an envelope ``{type, timestamp, data, id?, correlationId?}``
where ``timestamp`` is epoch milliseconds.
"""

import asyncio
import json
import logging
import secrets
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class MessageType(str, Enum):
    # Authentication
    AUTH_REQUEST = "auth_request"
    AUTH_SUCCESS = "auth_success"
    AUTH_FAILED = "auth_failed"

    # Subscriptions
    SUBSCRIBE = "subscribe"
    UNSUBSCRIBE = "unsubscribe"
    SUBSCRIPTION_CONFIRMED = "subscription_confirmed"

    # Verification monitoring
    VERIFICATION_STATUS = "verification_status"
    VERIFICATION_EVENT = "verification_event"

    # Explainability monitoring
    EXPLAINABILITY_MEASUREMENT = "explainability_measurement"
    EXPLAINABILITY_ALERT = "explainability_alert"
    EXPLAINABILITY_TREND = "explainability_trend"

    # Human oversight
    OVERSIGHT_REQUEST = "oversight_request"
    OVERSIGHT_DECISION = "oversight_decision"
    OVERSIGHT_STATUS = "oversight_status"

    # Audit trail
    AUDIT_ENTRY = "audit_entry"

    # System
    SYSTEM_STATUS = "system_status"
    CONNECTION_STATUS = "connection_status"
    ERROR = "error"


class SubscriptionChannel(str, Enum):
    VERIFICATION_EVENTS = "verification_events"
    EXPLAINABILITY_MONITORING = "explainability_monitoring"
    OVERSIGHT_REQUESTS = "oversight_requests"
    AUDIT_TRAIL = "audit_trail"
    SYSTEM_STATUS = "system_status"
    ALL = "all"


CHANNEL_VALUES: tuple[str, ...] = tuple(c.value for c in SubscriptionChannel)

ROLE_PERMISSIONS: dict[str, tuple[str, ...]] = {
    "admin": ("view_audit_logs", "manage_oversight", "view_system_status", "manage_system"),
    "supervisor": ("view_audit_logs", "manage_oversight", "view_system_status"),
    "reviewer": ("view_oversight", "view_system_status"),
    "viewer": ("view_system_status",),
}

# Channels not listed here are open to every client
CHANNEL_PERMISSIONS: dict[SubscriptionChannel, tuple[str, ...]] = {
    SubscriptionChannel.AUDIT_TRAIL: ("view_audit_logs",),
    SubscriptionChannel.OVERSIGHT_REQUESTS: ("manage_oversight", "view_oversight"),
    SubscriptionChannel.SYSTEM_STATUS: ("view_system_status",),
}

_INITIAL_STATUS: dict[SubscriptionChannel, MessageType] = {
    SubscriptionChannel.VERIFICATION_EVENTS: MessageType.VERIFICATION_STATUS,
    SubscriptionChannel.EXPLAINABILITY_MONITORING: MessageType.EXPLAINABILITY_TREND,
    SubscriptionChannel.OVERSIGHT_REQUESTS: MessageType.OVERSIGHT_STATUS,
}


def permissions_for_role(role: str) -> tuple[str, ...]:
    """Unknown roles get viewer permissions."""
    return ROLE_PERMISSIONS.get(role, ROLE_PERMISSIONS["viewer"])


def _now_ms() -> int:
    return int(time.time() * 1000)


def _make_id(prefix: str) -> str:
    return f"{prefix}_{_now_ms()}_{secrets.token_hex(5)[:9]}"


@dataclass(slots=True)
class MonitorClient:
    """A connected monitoring client."""

    id: str
    websocket: WebSocket
    is_authenticated: bool
    user_id: str | None = None
    role: str | None = None
    permissions: tuple[str, ...] = ()
    subscriptions: set[SubscriptionChannel] = field(default_factory=set)
    last_activity: int = field(default_factory=_now_ms)

    def can_access(self, channel: SubscriptionChannel) -> bool:
        required = CHANNEL_PERMISSIONS.get(channel)
        if required is None:
            return True
        return any(p in self.permissions for p in required)

    def wants(self, channel: SubscriptionChannel) -> bool:
        return (
            self.is_authenticated
            and (channel in self.subscriptions or SubscriptionChannel.ALL in self.subscriptions)
            and self.can_access(channel)
        )


@dataclass(slots=True)
class MonitorStatistics:
    total_messages_sent: int = 0
    total_verification_events: int = 0
    total_oversight_requests: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalMessagesSent": self.total_messages_sent,
            "totalVerificationEvents": self.total_verification_events,
            "totalOversightRequests": self.total_oversight_requests,
        }


class AIMonitor:
    """Client registry and broadcaster for the AI monitoring channel.

    Usage:
        monitor = AIMonitor()

        # In the WebSocket handler
        client = await monitor.connect(websocket)
        await monitor.handle_message(client, raw_text)
        await monitor.disconnect(client)

        # From anywhere in the app
        await monitor.broadcast(SubscriptionChannel.AUDIT_TRAIL, MessageType.AUDIT_ENTRY, {...})
    """

    def __init__(
        self,
        *,
        auth_required: bool = True,
        max_connections: int = 100,
        send_timeout: float = 1.0,
        heartbeat_interval: float = 30.0,
    ) -> None:
        self.auth_required = auth_required
        self.max_connections = max_connections
        self.send_timeout = send_timeout
        self.heartbeat_interval = heartbeat_interval
        self.statistics = MonitorStatistics()
        self._clients: dict[str, MonitorClient] = {}
        self._lock = asyncio.Lock()
        self._heartbeat: asyncio.Task[None] | None = None

    # ═══════════════════════════════════════════════════════════════
    # CONNECTIONS
    # ═══════════════════════════════════════════════════════════════

    async def connect(self, websocket: WebSocket) -> MonitorClient | None:
        """Register a client and send ``connection_status``.

        Returns:
            The new client, or None if the monitor is at capacity.
        """
        async with self._lock:
            if len(self._clients) >= self.max_connections:
                logger.warning("AI monitor at capacity (%d clients)", self.max_connections)
                return None
            client = MonitorClient(
                id=_make_id("client"),
                websocket=websocket,
                is_authenticated=not self.auth_required,
            )
            self._clients[client.id] = client

        logger.info("AI monitor client connected: %s", client.id)
        await self._send(client, MessageType.CONNECTION_STATUS, {
            "clientId": client.id,
            "authRequired": self.auth_required,
            "availableChannels": list(CHANNEL_VALUES),
        })
        return client

    async def disconnect(self, client: MonitorClient) -> None:
        async with self._lock:
            self._clients.pop(client.id, None)
        logger.info("AI monitor client disconnected: %s", client.id)

    def is_connected(self, client: MonitorClient) -> bool:
        return self._clients.get(client.id) is client

    @property
    def client_count(self) -> int:
        return len(self._clients)

    @property
    def authenticated_count(self) -> int:
        return sum(1 for c in self._clients.values() if c.is_authenticated)

    def status(self) -> dict[str, Any]:
        return {
            "connectedClients": self.client_count,
            "authenticatedClients": self.authenticated_count,
            "systemHealth": "healthy",
            **self.statistics.to_dict(),
        }

    async def _drop(self, client: MonitorClient, code: int, reason: str) -> None:
        """Unregister ``client`` and close its socket. Caller holds the lock."""
        self._clients.pop(client.id, None)
        try:
            await asyncio.wait_for(
                client.websocket.close(code=code, reason=reason), timeout=self.send_timeout
            )
        except Exception as e:
            logger.debug("Closing AI monitor client %s failed: %s", client.id, e)

    # ═══════════════════════════════════════════════════════════════
    # HEARTBEAT
    # ═══════════════════════════════════════════════════════════════

    async def sweep_stale(self, now_ms: int | None = None) -> int:
        """Close clients idle for more than two heartbeat intervals.

        Returns:
            Number of clients closed.
        """
        now = _now_ms() if now_ms is None else now_ms
        threshold = int(self.heartbeat_interval * 2 * 1000)
        async with self._lock:
            stale = [c for c in self._clients.values() if now - c.last_activity > threshold]
            for client in stale:
                logger.info("Removing stale AI monitor client %s", client.id)
                await self._drop(client, 1001, "Connection stale")
        return len(stale)

    def start_heartbeat(self) -> None:
        """Run :meth:`sweep_stale` every ``heartbeat_interval`` seconds on the running loop."""
        if self._heartbeat is None or self._heartbeat.done():
            self._heartbeat = asyncio.create_task(self._run_heartbeat())

    async def stop_heartbeat(self) -> None:
        if self._heartbeat is None:
            return
        self._heartbeat.cancel()
        try:
            await self._heartbeat
        except asyncio.CancelledError:
            pass
        self._heartbeat = None

    async def _run_heartbeat(self) -> None:
        while True:
            await asyncio.sleep(self.heartbeat_interval)
            await self.sweep_stale()

    # ═══════════════════════════════════════════════════════════════
    # CLIENT MESSAGES
    # ═══════════════════════════════════════════════════════════════

    async def handle_message(self, client: MonitorClient, raw: str) -> None:
        """Dispatch one client message. Protocol errors go back as ``error``."""
        client.last_activity = _now_ms()
        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            message = None
        if not isinstance(message, dict):
            await self._send_error(client, "Invalid message format", "MESSAGE_PARSE_ERROR")
            return

        correlation_id = message.get("id")
        data = message.get("data")
        if not isinstance(data, dict):
            data = {}

        match message.get("type"):
            case MessageType.AUTH_REQUEST.value:
                await self._handle_auth(client, data, correlation_id)
            case MessageType.SUBSCRIBE.value:
                await self._handle_subscribe(client, data, correlation_id)
            case MessageType.UNSUBSCRIBE.value:
                await self._handle_unsubscribe(client, data, correlation_id)
            case other:
                await self._send_error(
                    client, f"Unknown message type: {other}", "UNKNOWN_MESSAGE_TYPE", correlation_id
                )

    async def _handle_auth(
        self, client: MonitorClient, data: dict[str, Any], correlation_id: str | None
    ) -> None:
        if not data.get("token") and self.auth_required:
            await self._send(
                client, MessageType.AUTH_FAILED, {"reason": "Token required"},
                correlation_id=correlation_id,
            )
            return

        role = data.get("role") or "viewer"
        client.user_id = data.get("userId") or "anonymous"
        client.role = role
        client.permissions = permissions_for_role(role)
        client.is_authenticated = True
        logger.info("AI monitor client %s authenticated as %s (%s)", client.id, client.user_id, role)

        await self._send(client, MessageType.AUTH_SUCCESS, {
            "userId": client.user_id,
            "role": client.role,
            "permissions": list(client.permissions),
        }, correlation_id=correlation_id)

    async def _handle_subscribe(
        self, client: MonitorClient, data: dict[str, Any], correlation_id: str | None
    ) -> None:
        channels = data.get("channels")
        if not isinstance(channels, list):
            await self._send_error(
                client, "Channels must be an array", "INVALID_SUBSCRIPTION", correlation_id
            )
            return

        valid = [SubscriptionChannel(c) for c in channels if c in CHANNEL_VALUES]
        if not valid:
            await self._send_error(
                client, "No valid channels specified", "NO_VALID_CHANNELS", correlation_id
            )
            return

        allowed = [c for c in valid if client.can_access(c)]
        if not allowed:
            await self._send_error(
                client, "No permission for requested channels", "PERMISSION_DENIED", correlation_id
            )
            return

        client.subscriptions.update(allowed)
        await self._send(client, MessageType.SUBSCRIPTION_CONFIRMED, {
            "subscribed": [c.value for c in allowed],
            "rejected": [c.value for c in valid if c not in allowed],
        }, correlation_id=correlation_id)

        for channel in allowed:
            if status_type := _INITIAL_STATUS.get(channel):
                await self._send(client, status_type, self.status())

    async def _handle_unsubscribe(
        self, client: MonitorClient, data: dict[str, Any], correlation_id: str | None
    ) -> None:
        channels = data.get("channels")
        if not isinstance(channels, list):
            await self._send_error(
                client, "Channels must be an array", "INVALID_UNSUBSCRIPTION", correlation_id
            )
            return

        for channel in channels:
            if channel in CHANNEL_VALUES:
                client.subscriptions.discard(SubscriptionChannel(channel))
        await self._send(
            client, MessageType.SUBSCRIPTION_CONFIRMED, {"unsubscribed": channels},
            correlation_id=correlation_id,
        )

    # ═══════════════════════════════════════════════════════════════
    # SENDING
    # ═══════════════════════════════════════════════════════════════

    @staticmethod
    def envelope(
        type: MessageType,
        data: dict[str, Any],
        *,
        message_id: str | None = None,
        correlation_id: str | None = None,
    ) -> dict[str, Any]:
        message: dict[str, Any] = {"type": type.value, "timestamp": _now_ms(), "data": data}
        if message_id is not None:
            message["id"] = message_id
        if correlation_id is not None:
            message["correlationId"] = correlation_id
        return message

    async def _send(
        self,
        client: MonitorClient,
        type: MessageType,
        data: dict[str, Any],
        *,
        correlation_id: str | None = None,
    ) -> bool:
        message = self.envelope(type, data, correlation_id=correlation_id)
        return await self._deliver(client, message)

    async def _deliver(self, client: MonitorClient, message: dict[str, Any]) -> bool:
        try:
            await asyncio.wait_for(client.websocket.send_json(message), timeout=self.send_timeout)
        except TimeoutError:
            logger.warning("Dropping slow AI monitor client %s", client.id)
            return False
        except Exception as e:
            logger.debug("Send to AI monitor client %s failed: %s", client.id, e)
            return False
        client.last_activity = _now_ms()
        self.statistics.total_messages_sent += 1
        return True

    async def _send_error(
        self,
        client: MonitorClient,
        message: str,
        code: str,
        correlation_id: str | None = None,
    ) -> None:
        await self._send(
            client, MessageType.ERROR, {"message": message, "code": code},
            correlation_id=correlation_id,
        )

    async def broadcast(
        self,
        channel: SubscriptionChannel,
        type: MessageType,
        data: dict[str, Any],
    ) -> int:
        """Send an event to every client subscribed to ``channel`` (or ``all``).

        Slow or dead consumers are dropped and their sockets closed with 1011.

        Returns:
            Number of clients that received the event.
        """
        message = self.envelope(type, data, message_id=_make_id("msg"))
        match type:
            case MessageType.VERIFICATION_EVENT:
                self.statistics.total_verification_events += 1
            case MessageType.OVERSIGHT_REQUEST:
                self.statistics.total_oversight_requests += 1

        async with self._lock:
            recipients = [c for c in self._clients.values() if c.wants(channel)]
            sent = 0
            for client in recipients:
                if await self._deliver(client, message):
                    sent += 1
                else:
                    await self._drop(client, 1011, "Send failed")
        return sent


_monitor: AIMonitor | None = None


def get_monitor() -> AIMonitor:
    """Get the process-wide monitor, creating it from config on first use."""
    global _monitor
    if _monitor is None:
        from singularis.config import get_config

        settings = get_config().monitor
        _monitor = AIMonitor(
            auth_required=settings.auth_required,
            max_connections=settings.max_connections,
            send_timeout=settings.send_timeout,
            heartbeat_interval=settings.heartbeat_interval,
        )
    return _monitor


def set_monitor(monitor: AIMonitor | None) -> None:
    """Install ``monitor`` as the process-wide instance (None resets it)."""
    global _monitor
    _monitor = monitor
