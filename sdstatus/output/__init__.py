from sdstatus.output.formatters import format_duration
from sdstatus.output.presenter import (
    StatusPresenter,
    resolve_output_format,
    to_records,
)

__all__ = [
    'StatusPresenter',
    'format_duration',
    'resolve_output_format',
    'to_records',
]
