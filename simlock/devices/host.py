"""Device host wiring: pushes lock notifications out and routes MQTT requests in."""

import logging
from typing import Any

import aiomqtt

from simlock.api.websocket import ThingNotifier
from simlock.devices.dispatcher import ActionDispatcher
from simlock.devices.errors import InvalidActionInput, UnknownAction
from simlock.devices.lock import LockDevice
from simlock.models.action import ActionRecord
from simlock.mqtt.client import MQTTClient
from simlock.mqtt.topics import Topics

logger = logging.getLogger(__name__)


class DeviceHost:
    """Serves one lock to WebSocket clients and, optionally, an MQTT broker."""

    def __init__(
        self,
        device: LockDevice,
        dispatcher: ActionDispatcher,
        notifier: ThingNotifier,
        mqtt: MQTTClient | None = None,
    ):
        self.device = device
        self.dispatcher = dispatcher
        self.notifier = notifier
        self.mqtt = mqtt
        device.add_observer(self._on_property_change)
        dispatcher.add_observer(self._on_action_status)

    @property
    def mqtt_connected(self) -> bool:
        return self.mqtt is not None and self.mqtt.is_connected

    async def start(self) -> None:
        if self.mqtt is None:
            logger.info(f"Serving {self.device.device_id} without MQTT")
            return

        await self.mqtt.subscribe(
            Topics.thing_actions(self.device.device_id), self._handle_request
        )
        try:
            await self.mqtt.connect()
        except (aiomqtt.MqttError, OSError) as e:
            logger.warning(f"MQTT broker not available: {e}. Running without MQTT.")
            return
        await self.mqtt.publish(
            Topics.thing_properties(self.device.device_id),
            self.device.get_properties(),
            retain=True,
        )

    async def stop(self) -> None:
        if self.mqtt is not None:
            await self.mqtt.unsubscribe(Topics.thing_actions(self.device.device_id))
            await self.mqtt.disconnect()

    async def _on_property_change(self, name: str, value: Any) -> None:
        await self.notifier.push_property_status(name, value)
        if self.mqtt_connected:
            await self.mqtt.publish(
                Topics.thing_properties(self.device.device_id),
                self.device.get_properties(),
                retain=True,
            )

    async def _on_action_status(self, record: ActionRecord) -> None:
        await self.notifier.push_action_status(record)
        if self.mqtt_connected:
            await self.mqtt.publish(
                Topics.thing_action_status(self.device.device_id), record.to_description()
            )

    async def _handle_request(self, topic: str, payload: Any) -> None:
        """Handle ``{"action": name, "input": {...}}`` from the action topic."""
        name = payload.get("action") if isinstance(payload, dict) else None
        if not isinstance(name, str):
            logger.warning(f"Rejected action request on {topic}: no action name in {payload!r:.200}")
            return
        logger.info(f"Lock {self.device.device_id} received action request: {name}")
        try:
            await self.dispatcher.perform(name, payload.get("input"))
        except (UnknownAction, InvalidActionInput) as e:
            logger.warning(f"Rejected action request on {topic}: {e}")
