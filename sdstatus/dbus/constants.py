from enum import StrEnum
from types import MappingProxyType
from typing import Final, Mapping

from sdstatus.status.types import TimestampKind


class DBusConstants(StrEnum):
    """Standard D-Bus service and interface constants.
    """

    # Standard D-Bus interface for properties access
    PROPERTIES_INTERFACE = 'org.freedesktop.DBus.Properties'


class SystemdDBusConstants(StrEnum):
    """Systemd D-Bus service and interface constants.
    """

    # Service identification
    SERVICE_NAME = 'org.freedesktop.systemd1'
    OBJECT_PATH = '/org/freedesktop/systemd1'

    # Core systemd interfaces
    MANAGER_INTERFACE = 'org.freedesktop.systemd1.Manager'
    UNIT_INTERFACE = 'org.freedesktop.systemd1.Unit'

    # Errors
    NO_SUCH_UNIT_ERROR = 'org.freedesktop.systemd1.NoSuchUnit'


class UnitPropertyNames(StrEnum):
    """Systemd unit property names for the Unit interface.
    """

    ACTIVE_STATE = 'ActiveState'
    SUB_STATE = 'SubState'

    # Monotonic state transition timestamps
    INACTIVE_EXIT_TIMESTAMP_MONOTONIC = 'InactiveExitTimestampMonotonic'
    ACTIVE_ENTER_TIMESTAMP_MONOTONIC = 'ActiveEnterTimestampMonotonic'
    ACTIVE_EXIT_TIMESTAMP_MONOTONIC = 'ActiveExitTimestampMonotonic'
    INACTIVE_ENTER_TIMESTAMP_MONOTONIC = 'InactiveEnterTimestampMonotonic'


TIMESTAMP_PROPERTIES: Final[Mapping[TimestampKind, UnitPropertyNames]] = \
    MappingProxyType({
        TimestampKind.INACTIVE_EXIT:
            UnitPropertyNames.INACTIVE_EXIT_TIMESTAMP_MONOTONIC,
        TimestampKind.ACTIVE_ENTER:
            UnitPropertyNames.ACTIVE_ENTER_TIMESTAMP_MONOTONIC,
        TimestampKind.ACTIVE_EXIT:
            UnitPropertyNames.ACTIVE_EXIT_TIMESTAMP_MONOTONIC,
        TimestampKind.INACTIVE_ENTER:
            UnitPropertyNames.INACTIVE_ENTER_TIMESTAMP_MONOTONIC,
    })


class ConnectionConfig:
    """Configuration constants for D-Bus connection.
    """

    DEFAULT_MAX_RETRIES: Final[int] = 3
    DEFAULT_INITIAL_BACKOFF: Final[float] = 0.25
    BACKOFF_MULTIPLIER: Final[float] = 2.0
