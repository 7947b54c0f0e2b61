from enum import StrEnum
from typing import Self

from sdstatus.errors import UnrecognizedStateError


class ActiveState(StrEnum):
    """Systemd unit active states.
    """

    ACTIVE = 'active'
    RELOADING = 'reloading'
    INACTIVE = 'inactive'
    FAILED = 'failed'
    ACTIVATING = 'activating'
    DEACTIVATING = 'deactivating'

    @classmethod
    def from_wire(cls, value: str) -> Self:
        """Convert the ``ActiveState`` property value sent by systemd.

        Raises:
            UnrecognizedStateError: If the value is not a known state.
        """
        try:
            return cls(value)
        except ValueError:
            raise UnrecognizedStateError(value) from None


class TimestampKind(StrEnum):
    """Monotonic state transition timestamps kept by systemd per unit.
    """

    INACTIVE_EXIT = 'inactive-exit'
    ACTIVE_ENTER = 'active-enter'
    ACTIVE_EXIT = 'active-exit'
    INACTIVE_ENTER = 'inactive-enter'


class OutputFormat(StrEnum):
    """Output formats understood by the presenter.
    """

    TABLE = 'table'
    JSON = 'json'
