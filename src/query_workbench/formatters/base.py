"""Result renderer protocol and the format registry.

Each output format registers a factory that builds its formatter from the
shared RenderOptions, so callers only ever deal with a format name and one
options object.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from query_workbench.core.models import SortConfig  # noqa: TC001

if TYPE_CHECKING:
    from collections.abc import Iterator

    from query_workbench.core.models import QueryResult


@runtime_checkable
class Formatter(Protocol):
    """Turns a QueryResult into output lines, yielded lazily."""

    def format(self, result: QueryResult) -> Iterator[str]: ...


class RenderOptions(BaseModel):
    """Presentation settings shared by all formats; each uses what it needs."""

    model_config = ConfigDict(frozen=True)

    compact: bool = False
    width: int = 40
    widths: tuple[int, ...] = ()
    sort: SortConfig | None = None
    no_header: bool = False


FormatterFactory = Callable[[RenderOptions], Formatter]

_factories: dict[str, FormatterFactory] = {}


def register_format(name: str) -> Callable[[FormatterFactory], FormatterFactory]:
    def decorator(factory: FormatterFactory) -> FormatterFactory:
        _factories[name] = factory
        return factory

    return decorator


def available_formats() -> list[str]:
    return sorted(_factories)


def create_formatter(name: str, options: RenderOptions | None = None) -> Formatter:
    """Build the formatter registered under ``name``.

    Raises KeyError naming the available formats when ``name`` is unknown.
    """
    factory = _factories.get(name)
    if factory is None:
        available = ", ".join(available_formats())
        raise KeyError(f"Unknown format {name!r}. Available: {available}")
    return factory(options or RenderOptions())
