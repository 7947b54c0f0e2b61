import json
from datetime import timedelta

import click

from sdstatus.output.formatters import format_duration
from sdstatus.status.models import ResultSet, UnitStatusRecord
from sdstatus.status.types import ActiveState, OutputFormat

ROW_COLORS = {
    ActiveState.ACTIVE: 'green',
    ActiveState.FAILED: 'red',
}


def resolve_output_format(
    explicit: OutputFormat | None,
    is_tty: bool,
) -> OutputFormat:
    """Pick the output format, defaulting to a table on terminals.
    """
    if explicit is not None:
        return explicit
    return OutputFormat.TABLE if is_tty else OutputFormat.JSON


def to_records(results: ResultSet) -> list[UnitStatusRecord]:
    """Flatten a result set into records sorted by unit name.
    """
    return [
        UnitStatusRecord.from_unit_info(unit, results[unit])
        for unit in sorted(results)
    ]


class StatusPresenter:
    """Renders unit status results as a table or as JSON.
    """

    def render(
        self,
        results: ResultSet,
        output_format: OutputFormat,
        color: bool = False,
    ) -> str:
        """Render the results.

        Args:
            results: Unit status keyed by unit name
            output_format: Table or JSON
            color: Whether to color table rows by state

        Returns:
            The rendered text without a trailing newline
        """
        records = to_records(results)

        if output_format is OutputFormat.JSON:
            return self.render_json(records)
        return self.render_table(records, color=color)

    def render_json(self, records: list[UnitStatusRecord]) -> str:
        return json.dumps(
            [record.model_dump(mode='json') for record in records],
            indent=2,
        )

    def render_table(
        self,
        records: list[UnitStatusRecord],
        color: bool = False,
    ) -> str:
        """Format records into a simple table.
        """
        if not records:
            return 'No units found.'

        rows = [
            (
                record.unit,
                record.status,
                format_duration(timedelta(seconds=record.elapsed_seconds)),
                record.state,
            )
            for record in records
        ]

        # Calculate column widths
        unit_width = max(len('UNIT'), max(len(row[0]) for row in rows))
        state_width = max(len('STATE'), max(len(row[1]) for row in rows))
        since_width = max(len('SINCE'), max(len(row[2]) for row in rows))

        header = (
            f'{"UNIT":<{unit_width}} '
            f'{"STATE":<{state_width}} '
            f'{"SINCE":>{since_width}}'
        )
        lines = [header, '-' * len(header)]

        for unit, status, since, state in rows:
            line = (
                f'{unit:<{unit_width}} '
                f'{status:<{state_width}} '
                f'{since:>{since_width}}'
            )
            if color and state in ROW_COLORS:
                line = click.style(line, fg=ROW_COLORS[state])
            lines.append(line)

        return '\n'.join(lines)
