import asyncio
import logging
from typing import Callable, Iterable

from sdstatus.dbus.interfaces import ManagerClient, UnitClient
from sdstatus.status.clock import monotonic_usec
from sdstatus.status.models import ResultSet, UnitInfo, UnitState
from sdstatus.status.names import normalize_unit_name
from sdstatus.status.transition import TransitionTimeCalculator
from sdstatus.status.types import ActiveState


class StatusFetcher:
    """Fetches the status of several units concurrently.

    The whole fetch fails with the first error raised by any unit, no
    partial results are returned.
    """

    def __init__(
        self,
        manager_client: ManagerClient,
        unit_client: UnitClient,
        clock: Callable[[], int] = monotonic_usec,
        calculator: TransitionTimeCalculator | None = None,
    ):
        """Initialize the StatusFetcher.

        Args:
            manager_client: Client resolving unit names to handles
            unit_client: Client binding handles to unit views
            clock: Monotonic clock returning microseconds
            calculator: Time since transition calculator
        """
        self._logger = logging.getLogger(__name__)

        self._manager_client = manager_client
        self._unit_client = unit_client
        self._clock = clock
        self._calculator = calculator or TransitionTimeCalculator()

    async def fetch(self, unit_names: Iterable[str]) -> ResultSet:
        """Fetch the status of the given units.

        Args:
            unit_names: Unit names as typed by the user

        Returns:
            Mapping of full unit name to unit info

        Raises:
            SdstatusError: The first error raised while fetching any unit
        """
        # Duplicates collapse onto the same key.
        names = list(dict.fromkeys(
            normalize_unit_name(name) for name in unit_names
        ))
        if not names:
            return {}

        now_usec = self._clock()
        self._logger.debug(
            'Fetching %d unit(s) against monotonic clock %d.',
            len(names),
            now_usec,
        )

        tasks = [
            asyncio.create_task(
                self._fetch_unit(name, now_usec),
                name=f'fetch-{name}',
            )
            for name in names
        ]

        done, pending = await asyncio.wait(
            tasks,
            return_when=asyncio.FIRST_EXCEPTION,
        )

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        for task in tasks:
            if task in done and task.exception() is not None:
                raise task.exception()  # type: ignore[misc]

        return dict(task.result() for task in tasks)

    async def _fetch_unit(
        self,
        unit_name: str,
        now_usec: int,
    ) -> tuple[str, UnitInfo]:
        """Run the resolve, bind and read steps for a single unit.
        """
        handle = await self._manager_client.resolve_unit(unit_name)
        self._logger.debug('Resolved %s to %s.', unit_name, handle)

        view = await self._unit_client.for_handle(handle)
        state = ActiveState.from_wire(await view.active_state())
        sub_state = await view.sub_state()

        elapsed = await self._calculator.time_since(state, view, now_usec)
        self._logger.debug(
            'Unit %s is %s (%s) for %s.',
            unit_name,
            state,
            sub_state,
            elapsed,
        )

        return unit_name, UnitInfo(
            state=UnitState(state=state, sub_state=sub_state),
            time_since_transition=elapsed,
        )
