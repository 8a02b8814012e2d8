"""FastAPI application entry point for the simulated door lock."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from config import settings
from simlock.api.routes.thing import HREF_PREFIX, router as thing_router
from simlock.api.websocket import ThingNotifier
from simlock.devices.dispatcher import ActionDispatcher
from simlock.devices.host import DeviceHost
from simlock.devices.lock import LockDevice
from simlock.devices.loader import load_lock_from_yaml
from simlock.mqtt.client import MQTTClient, mqtt_client

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
# Quiet noisy loggers
logging.getLogger("aiomqtt").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def create_app(device: LockDevice | None = None, mqtt: MQTTClient | None = None) -> FastAPI:
    """Build the app around one lock instance.

    With no *device*, the lock is loaded from ``settings.lock_config_path``.
    With no *mqtt*, the shared client is used only if ``settings.mqtt_enabled``.
    """
    if device is None:
        device = load_lock_from_yaml(settings.lock_config_path)
    if mqtt is None and settings.mqtt_enabled:
        mqtt = mqtt_client

    notifier = ThingNotifier()
    dispatcher = ActionDispatcher(device, href_prefix=HREF_PREFIX)
    host = DeviceHost(device, dispatcher, notifier, mqtt=mqtt)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name}")
        await host.start()
        logger.info(f"{settings.app_name} is ready")
        yield
        logger.info("Shutting down...")
        await host.stop()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.device = device
    app.state.dispatcher = dispatcher
    app.state.host = host
    app.state.notifier = notifier

    app.include_router(thing_router, prefix="/api/v1")

    @app.get("/api/v1/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "device_id": device.device_id,
            "mqtt_connected": host.mqtt_connected,
            "users_count": len(device.registry),
            "websocket_connections": notifier.connection_count,
        }

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        """Push property and action updates; the client only listens."""
        await notifier.connect(websocket, device.get_properties())
        try:
            while True:
                data = await websocket.receive_text()
                logger.debug(f"WS received: {data}")
        except WebSocketDisconnect:
            await notifier.disconnect(websocket)

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "simlock.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
