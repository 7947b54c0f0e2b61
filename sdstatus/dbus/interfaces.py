from abc import ABC, abstractmethod

from sdstatus.status.types import TimestampKind


class UnitView(ABC):
    """Read-only view on the live state of a single unit.
    """

    @abstractmethod
    async def active_state(self) -> str:
        """Get the raw active state of the unit.
        """

    @abstractmethod
    async def sub_state(self) -> str:
        """Get the sub state of the unit.
        """

    @abstractmethod
    async def timestamp_for(self, kind: TimestampKind) -> int:
        """Get a monotonic state transition timestamp in microseconds.
        """


class ManagerClient(ABC):
    """Abstract interface for resolving unit names to unit handles.
    """

    @abstractmethod
    async def resolve_unit(self, unit_name: str) -> str:
        """Resolve a full unit name to an opaque unit handle.

        Raises:
            UnitNotFoundError: If the manager does not know the unit.
            TransportError: If the call fails.
        """


class UnitClient(ABC):
    """Abstract interface for binding unit handles to unit views.
    """

    @abstractmethod
    async def for_handle(self, handle: str) -> UnitView:
        """Bind a unit handle to a live unit view.

        Raises:
            TransportError: If the call fails.
        """
