import re
from typing import Any

from pydantic import BaseModel as PydanticBaseModel

_ARGS_BLOCK = re.compile(
    r'^\s*Args:\s*\n(?P<body>.*?)(?:\n\s*\n|\n\s*[A-Z][a-z]+:|\Z)',
    re.DOTALL | re.MULTILINE,
)
_ARG_LINE = re.compile(r'^\s*(?P<name>\w+):\s*(?P<text>.*)$')


def parse_docstring_args(docstring: str | None) -> dict[str, str]:
    """Extract ``name: description`` pairs from an ``Args:`` block.

    Continuation lines are folded into the preceding entry.
    """
    if not docstring:
        return {}

    match = _ARGS_BLOCK.search(docstring)
    if not match:
        return {}

    descriptions: dict[str, list[str]] = {}
    current = None
    for line in match.group('body').splitlines():
        arg_match = _ARG_LINE.match(line)
        if arg_match:
            current = arg_match.group('name')
            descriptions[current] = [arg_match.group('text').strip()]
        elif current and line.strip():
            descriptions[current].append(line.strip())

    return {
        name: ' '.join(part for part in parts if part)
        for name, parts in descriptions.items()
    }


class BaseModel(PydanticBaseModel):
    """Project-wide pydantic base model.

    Fields without an explicit description take the one documented for
    them in the class docstring ``Args:`` block.
    """

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)

        documented = parse_docstring_args(cls.__doc__)
        for name, field_info in cls.model_fields.items():
            if field_info.description is None and documented.get(name):
                field_info.description = documented[name]
