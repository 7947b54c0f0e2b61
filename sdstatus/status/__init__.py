from sdstatus.status.models import (
    ResultSet,
    UnitInfo,
    UnitState,
    UnitStatusRecord,
)
from sdstatus.status.names import is_valid_unit_name, normalize_unit_name
from sdstatus.status.types import ActiveState, OutputFormat, TimestampKind

__all__ = [
    'ActiveState',
    'OutputFormat',
    'ResultSet',
    'TimestampKind',
    'UnitInfo',
    'UnitState',
    'UnitStatusRecord',
    'is_valid_unit_name',
    'normalize_unit_name',
]
