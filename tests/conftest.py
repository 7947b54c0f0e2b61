from datetime import timedelta

import pytest

from sdstatus.status.models import UnitInfo, UnitState
from sdstatus.status.types import ActiveState, TimestampKind
from tests.fakes import FakeSystemd, FakeUnitView

NOW_USEC = 1_000_000_000


@pytest.fixture
def now_usec():
    return NOW_USEC


@pytest.fixture
def fake_systemd():
    """A service manager with a running, a failed and a starting unit."""
    return FakeSystemd({
        'nginx.service': FakeUnitView(
            'active',
            'running',
            {TimestampKind.ACTIVE_ENTER: NOW_USEC - 3_600_000_000},
        ),
        'backup.service': FakeUnitView(
            'failed',
            'failed',
            {TimestampKind.INACTIVE_ENTER: NOW_USEC - 90_500_000},
        ),
        'cups.socket': FakeUnitView(
            'activating',
            'start-pre',
            {TimestampKind.INACTIVE_EXIT: NOW_USEC - 2_000_000},
        ),
    })


@pytest.fixture
def result_set():
    """Results for three units, deliberately not in name order."""
    return {
        'sshd.service': UnitInfo(
            state=UnitState(state=ActiveState.ACTIVE, sub_state='running'),
            time_since_transition=timedelta(days=2, hours=3, seconds=5),
        ),
        'backup.service': UnitInfo(
            state=UnitState(state=ActiveState.FAILED, sub_state='failed'),
            time_since_transition=timedelta(seconds=90),
        ),
        'logrotate.timer': UnitInfo(
            state=UnitState(state=ActiveState.INACTIVE, sub_state='dead'),
            time_since_transition=timedelta(0),
        ),
    }
