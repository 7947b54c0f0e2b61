import logging
from datetime import timedelta
from types import MappingProxyType
from typing import Final, Mapping

from sdstatus.dbus.interfaces import UnitView
from sdstatus.status.types import ActiveState, TimestampKind

USEC_PER_SEC: Final[int] = 1_000_000

# Timestamp marking the entry into each active state.
TRANSITION_TIMESTAMPS: Final[Mapping[ActiveState, TimestampKind]] = \
    MappingProxyType({
        ActiveState.ACTIVE: TimestampKind.ACTIVE_ENTER,
        ActiveState.RELOADING: TimestampKind.ACTIVE_ENTER,
        ActiveState.INACTIVE: TimestampKind.INACTIVE_ENTER,
        ActiveState.FAILED: TimestampKind.INACTIVE_ENTER,
        ActiveState.ACTIVATING: TimestampKind.INACTIVE_EXIT,
        ActiveState.DEACTIVATING: TimestampKind.ACTIVE_EXIT,
    })

logger = logging.getLogger(__name__)


def elapsed_since(now_usec: int, transition_usec: int) -> timedelta:
    """Whole seconds between a transition and the sampled monotonic now.

    A transition newer than ``now_usec`` (e.g. the manager was restarted
    after the sample was taken) yields zero.
    """
    if transition_usec > now_usec:
        logger.warning(
            'Transition timestamp %d is ahead of sampled clock %d, '
            'reporting zero elapsed time.',
            transition_usec,
            now_usec,
        )
        return timedelta(0)

    return timedelta(seconds=(now_usec - transition_usec) // USEC_PER_SEC)


class TransitionTimeCalculator:
    """Computes how long a unit has been in its current state.
    """

    def timestamp_kind_for(self, state: ActiveState) -> TimestampKind:
        """Get the timestamp marking the entry into the given state.
        """
        return TRANSITION_TIMESTAMPS[state]

    async def time_since(
        self,
        state: ActiveState,
        view: UnitView,
        now_usec: int,
    ) -> timedelta:
        """Time elapsed since the unit entered its current state.

        Args:
            state: Current active state of the unit
            view: Unit to read the transition timestamp from
            now_usec: Monotonic clock sample shared by the whole run

        Returns:
            Elapsed time truncated to whole seconds

        Raises:
            TransportError: If reading the timestamp fails
        """
        transition_usec = await view.timestamp_for(
            self.timestamp_kind_for(state)
        )
        return elapsed_since(now_usec, transition_usec)
