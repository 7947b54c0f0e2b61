from sdstatus.cli.command import fetch_status, status


def run_cli() -> None:
    """Run the CLI interface.
    """
    status()


__all__ = [
    'fetch_status',
    'run_cli',
    'status',
]
