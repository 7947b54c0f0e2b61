from typing import Final

UNIT_TYPE_SUFFIXES: Final[tuple[str, ...]] = (
    '.service',
    '.socket',
    '.device',
    '.mount',
    '.automount',
    '.swap',
    '.target',
    '.path',
    '.timer',
    '.slice',
    '.scope',
)

DEFAULT_UNIT_SUFFIX: Final[str] = '.service'


def is_valid_unit_name(name: str) -> bool:
    """Check whether the name carries a known unit type suffix.
    """
    return name.endswith(UNIT_TYPE_SUFFIXES)


def normalize_unit_name(name: str) -> str:
    """Turn a user supplied unit name into a full unit name.

    Names without a unit type suffix are treated as services, the same
    way systemctl does it.
    """
    if is_valid_unit_name(name):
        return name
    return f'{name}{DEFAULT_UNIT_SUFFIX}'
