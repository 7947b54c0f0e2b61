from datetime import timedelta

import pytest

from sdstatus.status.transition import (
    TRANSITION_TIMESTAMPS,
    TransitionTimeCalculator,
    elapsed_since,
)
from sdstatus.status.types import ActiveState, TimestampKind
from tests.fakes import FakeUnitView

EXPECTED_TIMESTAMPS = {
    ActiveState.ACTIVE: TimestampKind.ACTIVE_ENTER,
    ActiveState.ACTIVATING: TimestampKind.INACTIVE_EXIT,
    ActiveState.DEACTIVATING: TimestampKind.ACTIVE_EXIT,
    ActiveState.FAILED: TimestampKind.INACTIVE_ENTER,
    ActiveState.INACTIVE: TimestampKind.INACTIVE_ENTER,
    ActiveState.RELOADING: TimestampKind.ACTIVE_ENTER,
}


def test_every_state_has_a_timestamp():
    assert dict(TRANSITION_TIMESTAMPS) == EXPECTED_TIMESTAMPS


@pytest.mark.asyncio
@pytest.mark.parametrize('state,kind', EXPECTED_TIMESTAMPS.items())
async def test_time_since_reads_only_the_matching_timestamp(state, kind):
    # Each kind gets a distinct value so a wrong lookup changes the result.
    timestamps = {
        TimestampKind.INACTIVE_EXIT: 100_000_000,
        TimestampKind.ACTIVE_ENTER: 200_000_000,
        TimestampKind.ACTIVE_EXIT: 300_000_000,
        TimestampKind.INACTIVE_ENTER: 400_000_000,
    }
    view = FakeUnitView(state.value, 'x', timestamps)

    elapsed = await TransitionTimeCalculator().time_since(
        state,
        view,
        1_000_000_000,
    )

    assert view.requested_timestamps == [kind]
    assert elapsed == timedelta(
        seconds=(1_000_000_000 - timestamps[kind]) // 1_000_000
    )


@pytest.mark.asyncio
async def test_one_second_since_active_enter():
    view = FakeUnitView(
        'active',
        'running',
        {TimestampKind.ACTIVE_ENTER: 999_000_000},
    )

    elapsed = await TransitionTimeCalculator().time_since(
        ActiveState.ACTIVE,
        view,
        1_000_000_000,
    )

    assert elapsed == timedelta(seconds=1)


def test_sub_second_precision_is_truncated():
    assert elapsed_since(10_999_999, 9_000_000) == timedelta(seconds=1)
    assert elapsed_since(10_000_000, 9_000_001) == timedelta(0)


def test_same_instant_is_zero():
    assert elapsed_since(5_000_000, 5_000_000) == timedelta(0)


def test_transition_after_now_is_clamped(caplog):
    with caplog.at_level('WARNING', logger='sdstatus.status.transition'):
        elapsed = elapsed_since(1_000_000, 5_000_000)

    assert elapsed == timedelta(0)
    assert 'ahead of sampled clock' in caplog.text
