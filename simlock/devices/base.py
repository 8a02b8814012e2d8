"""Base device class with observable properties."""

import logging
from typing import Any, Callable, Coroutine

from simlock.devices.errors import PropertyError
from simlock.models.device import DeviceConfig, build_thing_description

logger = logging.getLogger(__name__)

# Called with (property name, new value) after a property changes
PropertyObserver = Callable[[str, Any], Coroutine[Any, Any, None]]


class DeviceProperty:
    """A named value read through *getter*; writable only if *setter* is given."""

    def __init__(
        self,
        name: str,
        getter: Callable[[], Any],
        setter: Callable[[Any], None] | None = None,
    ):
        self.name = name
        self.getter = getter
        self.setter = setter

    @property
    def read_only(self) -> bool:
        return self.setter is None


class BaseDevice:
    """Base class for simulated devices served by a device host.

    Subclasses declare their properties with ``_add_property``; the host
    reads them, writes the writable ones, and subscribes to changes.
    """

    def __init__(self, config: DeviceConfig):
        self.config = config
        self.device_id = config.id
        self.display_name = config.title
        self._properties: dict[str, DeviceProperty] = {}
        self._observers: list[PropertyObserver] = []

    def _add_property(self, prop: DeviceProperty) -> None:
        self._properties[prop.name] = prop

    def has_property(self, name: str) -> bool:
        return name in self._properties

    def get_property(self, name: str) -> Any:
        prop = self._properties.get(name)
        if prop is None:
            raise PropertyError(name, "unknown property")
        return prop.getter()

    def get_properties(self) -> dict[str, Any]:
        return {name: prop.getter() for name, prop in self._properties.items()}

    async def set_property(self, name: str, value: Any) -> None:
        """Write a property on behalf of the host and notify observers."""
        prop = self._properties.get(name)
        if prop is None:
            raise PropertyError(name, "unknown property")
        if prop.read_only:
            raise PropertyError(name, "read-only")
        try:
            prop.setter(value)
        except ValueError as e:
            raise PropertyError(name, f"invalid value {value!r}") from e
        logger.info(f"Device {self.device_id} property {name} set to {value!r}")
        await self.notify_property(name)

    def add_observer(self, observer: PropertyObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: PropertyObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    async def notify_property(self, name: str) -> None:
        """Push the current value of *name* to every observer."""
        value = self.get_property(name)
        for observer in list(self._observers):
            try:
                await observer(name, value)
            except Exception as e:
                logger.error(
                    f"Property observer error for {self.device_id}.{name}: {e}",
                    exc_info=True,
                )

    def get_thing_description(self, href_prefix: str = "") -> dict[str, Any]:
        return build_thing_description(self.config, href_prefix)
