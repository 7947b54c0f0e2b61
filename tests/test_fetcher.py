import asyncio
from datetime import timedelta

import pytest

from sdstatus.errors import (
    TransportError,
    UnitNotFoundError,
    UnrecognizedStateError,
)
from sdstatus.status.fetcher import StatusFetcher
from sdstatus.status.models import UnitState
from sdstatus.status.types import ActiveState, TimestampKind
from tests.fakes import FakeSystemd, FakeUnitView


def make_fetcher(systemd: FakeSystemd, now_usec: int) -> StatusFetcher:
    return StatusFetcher(systemd, systemd, clock=lambda: now_usec)


@pytest.mark.asyncio
async def test_fetch_returns_state_and_elapsed_time(fake_systemd, now_usec):
    results = await make_fetcher(fake_systemd, now_usec).fetch(
        ['nginx', 'backup.service', 'cups.socket']
    )

    assert set(results) == {'nginx.service', 'backup.service', 'cups.socket'}

    nginx = results['nginx.service']
    assert nginx.state == UnitState(
        state=ActiveState.ACTIVE,
        sub_state='running',
    )
    assert nginx.time_since_transition == timedelta(hours=1)

    assert results['backup.service'].state.state is ActiveState.FAILED
    assert results['backup.service'].time_since_transition == \
        timedelta(seconds=90)
    assert results['cups.socket'].time_since_transition == \
        timedelta(seconds=2)


@pytest.mark.asyncio
async def test_names_are_normalized_before_lookup(fake_systemd, now_usec):
    await make_fetcher(fake_systemd, now_usec).fetch(['nginx'])

    assert fake_systemd.resolved == ['nginx.service']


@pytest.mark.asyncio
async def test_duplicate_names_collapse(fake_systemd, now_usec):
    results = await make_fetcher(fake_systemd, now_usec).fetch(
        ['nginx', 'nginx.service']
    )

    assert list(results) == ['nginx.service']


@pytest.mark.asyncio
async def test_clock_is_sampled_once(fake_systemd):
    samples = []

    def clock():
        samples.append(1_000_000_000)
        return samples[-1]

    fetcher = StatusFetcher(fake_systemd, fake_systemd, clock=clock)
    await fetcher.fetch(['nginx', 'backup', 'cups.socket'])

    assert len(samples) == 1


@pytest.mark.asyncio
async def test_units_are_fetched_concurrently(now_usec):
    # The first unit only answers once the last one has been fetched.
    gate = asyncio.Event()

    class OpeningView(FakeUnitView):
        async def sub_state(self) -> str:
            gate.set()
            return await super().sub_state()

    systemd = FakeSystemd({
        'a.service': FakeUnitView('active', 'running', block=gate),
        'b.service': OpeningView('inactive', 'dead'),
    })

    results = await asyncio.wait_for(
        make_fetcher(systemd, now_usec).fetch(['a', 'b']),
        timeout=5,
    )

    assert set(results) == {'a.service', 'b.service'}


@pytest.mark.asyncio
async def test_unknown_unit_fails_whole_fetch(fake_systemd, now_usec):
    with pytest.raises(UnitNotFoundError) as exc_info:
        await make_fetcher(fake_systemd, now_usec).fetch(
            ['nginx', 'doesnotexist']
        )

    assert exc_info.value.unit_name == 'doesnotexist.service'


@pytest.mark.asyncio
async def test_transport_error_propagates_unchanged(fake_systemd, now_usec):
    fake_systemd.broken.add('nginx.service')

    with pytest.raises(TransportError, match='Connection lost'):
        await make_fetcher(fake_systemd, now_usec).fetch(['nginx'])


@pytest.mark.asyncio
async def test_unrecognized_state_is_fatal(fake_systemd, now_usec):
    fake_systemd.units['odd.service'] = FakeUnitView('exploding', 'boom')

    with pytest.raises(UnrecognizedStateError) as exc_info:
        await make_fetcher(fake_systemd, now_usec).fetch(['nginx', 'odd'])

    assert exc_info.value.value == 'exploding'


@pytest.mark.asyncio
async def test_failure_cancels_outstanding_units(now_usec):
    never = asyncio.Event()
    systemd = FakeSystemd({
        'slow.service': FakeUnitView('active', 'running', block=never),
    })

    with pytest.raises(UnitNotFoundError):
        await asyncio.wait_for(
            make_fetcher(systemd, now_usec).fetch(['slow', 'missing']),
            timeout=5,
        )

    pending = [
        task for task in asyncio.all_tasks()
        if task.get_name().startswith('fetch-')
    ]
    assert pending == []


@pytest.mark.asyncio
async def test_skewed_timestamp_reports_zero(now_usec):
    systemd = FakeSystemd({
        'new.service': FakeUnitView(
            'active',
            'running',
            {TimestampKind.ACTIVE_ENTER: now_usec + 5_000_000},
        ),
    })

    results = await make_fetcher(systemd, now_usec).fetch(['new'])

    assert results['new.service'].time_since_transition == timedelta(0)


@pytest.mark.asyncio
async def test_empty_input_returns_empty_result(fake_systemd, now_usec):
    assert await make_fetcher(fake_systemd, now_usec).fetch([]) == {}
    assert fake_systemd.resolved == []
