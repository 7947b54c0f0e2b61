import asyncio
import logging

from dbus_next.aio.message_bus import MessageBus
from dbus_next.constants import BusType
from dbus_next.errors import AuthError, DBusError

from sdstatus.dbus.constants import ConnectionConfig
from sdstatus.errors import TransportError

# Raised by dbus-next for pending calls when the bus socket goes away.
CONNECTION_ERRORS = (EOFError, OSError)


class DBusConnectionManager:
    """Owns the D-Bus connection shared by all unit lookups of a run.
    """

    def __init__(
        self,
        bus_type: BusType = BusType.SYSTEM,
        max_retries: int = ConnectionConfig.DEFAULT_MAX_RETRIES,
        initial_backoff: float = ConnectionConfig.DEFAULT_INITIAL_BACKOFF,
    ):
        """
        Initializes the DBusConnectionManager.

        Args:
            bus_type: The D-Bus bus type to connect to.
            max_retries: The maximum number of connection attempts.
            initial_backoff: The initial backoff delay in seconds for retries.
        """
        self._logger = logging.getLogger(__name__)

        self._bus_type = bus_type
        self._bus: MessageBus | None = None
        self._max_retries = max_retries
        self._initial_backoff = initial_backoff
        self._connection_lock = asyncio.Lock()

    async def connect(self) -> None:
        """Connects to the D-Bus with an exponential backoff retry mechanism.

        Raises:
            TransportError: If no connection could be established.
        """
        async with self._connection_lock:
            if self._is_already_connected():
                self._logger.debug('Already connected to D-Bus.')
                return

            await self._attempt_connection_with_retry()

    def _is_already_connected(self) -> bool:
        """Check if already connected to D-Bus.
        """
        return self._bus is not None and self._bus.connected

    async def _attempt_connection_with_retry(self) -> None:
        """Attempt connection with exponential backoff retry logic.
        """
        backoff = self._initial_backoff
        last_error: Exception | None = None

        for attempt in range(1, self._max_retries + 1):
            try:
                self._logger.debug(
                    'Connecting to %s D-Bus (attempt %d/%d).',
                    self._bus_type.name.lower(),
                    attempt,
                    self._max_retries,
                )
                self._bus = await MessageBus(bus_type=self._bus_type).connect()
                self._logger.debug('Connected to D-Bus.')
                return
            except (DBusError, AuthError, *CONNECTION_ERRORS) as e:
                self._logger.warning('Failed to connect to D-Bus: %s', e)
                last_error = e

            if attempt < self._max_retries:
                self._logger.debug('Retrying in %.2f seconds.', backoff)
                await asyncio.sleep(backoff)
                backoff *= ConnectionConfig.BACKOFF_MULTIPLIER

        self._logger.error(
            'Could not connect to D-Bus after %d attempts.',
            self._max_retries,
        )
        raise TransportError(
            f'Failed to connect to D-Bus after {self._max_retries} '
            f'attempts: {last_error}'
        ) from last_error

    async def disconnect(self) -> None:
        """Disconnects from the D-Bus if connected.
        """
        async with self._connection_lock:
            if self._bus:
                self._logger.debug('Disconnecting from D-Bus.')
                self._bus.disconnect()
                self._bus = None

    async def get_bus(self) -> MessageBus:
        """Returns the MessageBus object, connecting on first use.

        Returns:
            The connected MessageBus object.

        Raises:
            TransportError: If a connection cannot be established.
        """
        if not self._is_already_connected():
            await self.connect()

        if not self._bus:
            raise TransportError('Failed to get a valid D-Bus connection.')

        return self._bus
