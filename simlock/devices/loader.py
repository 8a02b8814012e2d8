"""Builds a LockDevice from its YAML config file."""

import logging
from pathlib import Path

import yaml

from simlock.devices.lock import LockDevice
from simlock.models.device import DeviceConfig

logger = logging.getLogger(__name__)


def load_lock_from_yaml(config_path: str) -> LockDevice:
    """Load lock identity and seed users; falls back to defaults if the file is missing."""
    path = Path(config_path)
    if not path.exists():
        logger.warning(f"Lock config not found: {config_path}, using defaults")
        return LockDevice()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    config = DeviceConfig.model_validate(data)
    device = LockDevice(config)
    logger.info(
        f"Loaded lock {device.device_id} ({device.display_name}) "
        f"with {len(device.registry)} user(s)"
    )
    return device
