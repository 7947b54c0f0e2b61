import logging
from typing import Any

from dbus_next.errors import DBusError

from sdstatus.dbus.connection import CONNECTION_ERRORS, DBusConnectionManager
from sdstatus.dbus.constants import (
    TIMESTAMP_PROPERTIES,
    DBusConstants,
    SystemdDBusConstants,
    UnitPropertyNames,
)
from sdstatus.dbus.interfaces import UnitClient, UnitView
from sdstatus.dbus.types import DBusVariantValue
from sdstatus.errors import TransportError
from sdstatus.status.types import TimestampKind


class SystemdUnit(UnitView):
    """Represents a systemd unit.

    Reads unit properties via D-Bus.
    """

    def __init__(self, dbus_manager: DBusConnectionManager, object_path: str):
        """Initialize a SystemdUnit instance.

        Args:
            dbus_manager: The D-Bus connection manager
            object_path: The D-Bus object path for this unit
        """
        self._logger = logging.getLogger(__name__)

        self._dbus_manager = dbus_manager
        self._object_path = object_path
        self._proxy_object = None

    @property
    def object_path(self) -> str:
        """Get the D-Bus object path for this unit.
        """
        return self._object_path

    async def ensure_proxy(self) -> None:
        """Ensure the D-Bus proxy object is initialized.

        Raises:
            TransportError: If the unit object cannot be introspected
        """
        if self._proxy_object is not None:
            return

        bus = await self._dbus_manager.get_bus()
        try:
            introspection = await bus.introspect(
                SystemdDBusConstants.SERVICE_NAME,
                self._object_path,
            )
        except DBusError as e:
            self._logger.error(
                'Failed to create proxy for unit %s: %s',
                self._object_path,
                e,
            )
            raise TransportError(
                f'Failed to bind unit {self._object_path}: {e.text}'
            ) from e
        except CONNECTION_ERRORS as e:
            self._logger.error(
                'Lost D-Bus connection creating proxy for unit %s: %r',
                self._object_path,
                e,
            )
            raise TransportError(
                f'Lost connection while binding unit '
                f'{self._object_path}: {e!r}'
            ) from e

        self._proxy_object = bus.get_proxy_object(
            SystemdDBusConstants.SERVICE_NAME,
            self._object_path,
            introspection,
        )

    async def get_property(self, interface: str, property_name: str) -> Any:
        """Get a single property from the unit.

        Args:
            interface: The D-Bus interface name
            property_name: The property name to retrieve

        Returns:
            The property value

        Raises:
            TransportError: If the D-Bus call fails
        """
        await self.ensure_proxy()

        try:
            properties_interface = self._proxy_object.get_interface(  # type: ignore
                DBusConstants.PROPERTIES_INTERFACE
            )
            variant = await properties_interface.call_get(  # type: ignore
                interface,
                property_name,
            )
            return DBusVariantValue.from_dbus_variant(variant).value
        except DBusError as e:
            self._logger.warning(
                'Failed to get property %s.%s for unit %s: %s',
                interface,
                property_name,
                self._object_path,
                e,
            )
            raise TransportError(
                f'Failed to read {property_name} of {self._object_path}: '
                f'{e.text}'
            ) from e
        except CONNECTION_ERRORS as e:
            self._logger.warning(
                'Lost D-Bus connection reading %s.%s for unit %s: %r',
                interface,
                property_name,
                self._object_path,
                e,
            )
            raise TransportError(
                f'Lost connection while reading {property_name} of '
                f'{self._object_path}: {e!r}'
            ) from e

    async def active_state(self) -> str:
        """Get the active state of the unit.

        Returns:
            The active state string (e.g., 'active', 'inactive', 'failed')
        """
        return await self.get_property(
            SystemdDBusConstants.UNIT_INTERFACE,
            UnitPropertyNames.ACTIVE_STATE,
        )

    async def sub_state(self) -> str:
        """Get the sub state of the unit.
        """
        return await self.get_property(
            SystemdDBusConstants.UNIT_INTERFACE,
            UnitPropertyNames.SUB_STATE,
        )

    async def timestamp_for(self, kind: TimestampKind) -> int:
        """Get a monotonic transition timestamp in microseconds.
        """
        return await self.get_property(
            SystemdDBusConstants.UNIT_INTERFACE,
            TIMESTAMP_PROPERTIES[kind],
        )


class SystemdUnitClient(UnitClient):
    """Factory for SystemdUnit views sharing one D-Bus connection.
    """

    def __init__(self, dbus_manager: DBusConnectionManager):
        self._dbus_manager = dbus_manager

    async def for_handle(self, handle: str) -> SystemdUnit:
        unit = SystemdUnit(self._dbus_manager, handle)
        await unit.ensure_proxy()
        return unit
