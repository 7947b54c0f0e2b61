from datetime import timedelta
from typing import Self

from pydantic import Field, field_validator

from sdstatus.status.types import ActiveState
from sdstatus.utils import BaseModel


class UnitState(BaseModel):
    """Coarse and fine grained state of a unit.

    Args:
        state: Active state of the unit
        sub_state: Unit type specific sub state, passed through as is
    """
    model_config = {'frozen': True}

    state: ActiveState = Field(...)
    sub_state: str = Field(...)

    def __str__(self) -> str:
        return f'{self.state} ({self.sub_state})'


class UnitInfo(BaseModel):
    """Status of a single unit as shown to the operator.

    Args:
        state: Current unit state
        time_since_transition: Time spent in the current state,
            in whole seconds
    """
    model_config = {'frozen': True}

    state: UnitState = Field(...)
    time_since_transition: timedelta = Field(...)

    @field_validator('time_since_transition')
    @classmethod
    def validate_time_since_transition(cls, v: timedelta) -> timedelta:
        if v < timedelta(0):
            raise ValueError('Time since transition cannot be negative')
        if v.microseconds:
            raise ValueError('Time since transition must be whole seconds')
        return v


ResultSet = dict[str, UnitInfo]


class UnitStatusRecord(BaseModel):
    """Flat unit status record used for structured output.

    Args:
        unit: Unit name
        state: Active state of the unit
        sub_state: Sub state of the unit
        elapsed_seconds: Seconds spent in the current state
    """
    model_config = {'frozen': True}

    unit: str = Field(..., min_length=1)
    state: ActiveState = Field(...)
    sub_state: str = Field(...)
    elapsed_seconds: int = Field(..., ge=0)

    @property
    def status(self) -> str:
        """State and sub state as shown in the table.
        """
        return str(UnitState(state=self.state, sub_state=self.sub_state))

    @classmethod
    def from_unit_info(cls, unit: str, info: UnitInfo) -> Self:
        """Flatten a unit name and its info into a record.
        """
        return cls(
            unit=unit,
            state=info.state.state,
            sub_state=info.state.sub_state,
            elapsed_seconds=int(info.time_since_transition.total_seconds()),
        )
