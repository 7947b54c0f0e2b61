import logging
import sys

from pydantic import Field, field_validator

from sdstatus.status.types import OutputFormat
from sdstatus.utils import BaseModel

# Accepted spellings of the --output-type values.
OUTPUT_TYPE_ALIASES = {
    'structured': OutputFormat.JSON,
}


def setup_logger(verbose: bool = False) -> None:
    """Configure logging to use systemd journal.

    With ``verbose`` debug messages are also written to stderr.
    """
    from systemd.journal import JournalHandler

    app_logger = logging.getLogger('sdstatus')
    app_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    journal_handler = JournalHandler(SYSLOG_IDENTIFIER='sdstatus')
    app_logger.addHandler(journal_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.DEBUG)
        stderr_handler.setFormatter(
            logging.Formatter('%(levelname)s %(name)s: %(message)s')
        )
        app_logger.addHandler(stderr_handler)


class RunConfig(BaseModel):
    """Options of a single sdstatus invocation.

    Args:
        units: Unit names as given on the command line
        output_format: Explicitly requested output format, if any
        force_color: Color table output even when not writing to a terminal
        user_bus: Query the user service manager instead of the system one
        verbose: Log debug messages to stderr
    """
    model_config = {'frozen': True}

    units: tuple[str, ...] = Field(..., min_length=1)
    output_format: OutputFormat | None = Field(None)
    force_color: bool = Field(False)
    user_bus: bool = Field(False)
    verbose: bool = Field(False)

    @field_validator('units')
    @classmethod
    def validate_units(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if any(not unit.strip() for unit in v):
            raise ValueError('Unit names cannot be empty')
        return v

    @field_validator('output_format', mode='before')
    @classmethod
    def resolve_output_type_alias(cls, v: object) -> object:
        if isinstance(v, str):
            return OUTPUT_TYPE_ALIASES.get(v.lower(), v.lower())
        return v
