import asyncio
import logging

from dbus_next.errors import DBusError

from sdstatus.dbus.connection import CONNECTION_ERRORS, DBusConnectionManager
from sdstatus.dbus.constants import SystemdDBusConstants
from sdstatus.dbus.interfaces import ManagerClient
from sdstatus.errors import TransportError, UnitNotFoundError


class SystemdManager(ManagerClient):
    """Resolves unit names through the systemd manager object.
    """

    def __init__(self, dbus_manager: DBusConnectionManager):
        """Initialize the SystemdManager.

        Args:
            dbus_manager: The D-Bus connection manager.
        """
        self._logger = logging.getLogger(__name__)

        self._dbus_manager = dbus_manager
        self._manager_proxy = None
        self._proxy_lock = asyncio.Lock()

    async def _ensure_manager_proxy(self) -> None:
        """Ensure the systemd manager D-Bus proxy is initialized.
        """
        async with self._proxy_lock:
            if self._manager_proxy is not None:
                return

            bus = await self._dbus_manager.get_bus()
            try:
                introspection = await bus.introspect(
                    SystemdDBusConstants.SERVICE_NAME,
                    SystemdDBusConstants.OBJECT_PATH,
                )
            except DBusError as e:
                self._logger.error(
                    'Failed to create systemd manager proxy: %s',
                    e,
                )
                raise TransportError(
                    f'Failed to reach the systemd manager: {e.text}'
                ) from e
            except CONNECTION_ERRORS as e:
                self._logger.error(
                    'Lost D-Bus connection creating manager proxy: %r',
                    e,
                )
                raise TransportError(
                    f'Lost connection to the systemd manager: {e!r}'
                ) from e

            proxy_object = bus.get_proxy_object(
                SystemdDBusConstants.SERVICE_NAME,
                SystemdDBusConstants.OBJECT_PATH,
                introspection,
            )
            self._manager_proxy = proxy_object.get_interface(
                SystemdDBusConstants.MANAGER_INTERFACE
            )

    async def resolve_unit(self, unit_name: str) -> str:
        """Get the D-Bus object path of a loaded unit.

        Args:
            unit_name: The full name of the unit (e.g., 'nginx.service')

        Returns:
            The unit object path

        Raises:
            UnitNotFoundError: If systemd does not know the unit
            TransportError: If the D-Bus call fails
        """
        await self._ensure_manager_proxy()

        try:
            return await self._manager_proxy.call_get_unit(unit_name)  # type: ignore
        except DBusError as e:
            if e.type == SystemdDBusConstants.NO_SUCH_UNIT_ERROR:
                self._logger.info('Unit %s not found: %s', unit_name, e.text)
                raise UnitNotFoundError(unit_name) from e

            self._logger.error(
                'Failed to get unit %s: %s',
                unit_name,
                e,
            )
            raise TransportError(
                f'Failed to get unit {unit_name}: {e.text}'
            ) from e
        except CONNECTION_ERRORS as e:
            self._logger.error(
                'Lost D-Bus connection getting unit %s: %r',
                unit_name,
                e,
            )
            raise TransportError(
                f'Lost connection while getting unit {unit_name}: {e!r}'
            ) from e
