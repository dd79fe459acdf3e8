"""ExtraData — per-Logfile key/value storage for event handlers.

Handlers use it to stash structured state (for example the last matched
slices) without the engine knowing their types.  Values are stored as
strings; ``put``/``get`` serialise through YAML unless other callables are
supplied.  The store persists with its Logfile as a plain string map.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import yaml
from pydantic import Field, RootModel

from minutecat.exceptions import ExtraDataNotFoundError


def yaml_serialize(value: Any) -> str:
    text = yaml.safe_dump(value, default_flow_style=True)
    # plain top-level scalars are followed by a document end marker
    return text.removesuffix("...\n").strip()


def yaml_deserialize(data: str) -> Any:
    return yaml.safe_load(data)


class ExtraData(RootModel[dict[str, str]]):
    root: dict[str, str] = Field(default_factory=dict)

    def put(
        self,
        name: str,
        value: Any,
        serialize: Callable[[Any], str] = yaml_serialize,
    ) -> None:
        self.root[name] = serialize(value)

    def get(
        self,
        name: str,
        deserialize: Callable[[str], Any] = yaml_deserialize,
    ) -> Any:
        """Return the value stored under *name*.

        Raises:
            ExtraDataNotFoundError: nothing is stored under *name*.
        """
        try:
            data = self.root[name]
        except KeyError:
            raise ExtraDataNotFoundError(name) from None
        return deserialize(data)

    def remove(self, name: str) -> str | None:
        return self.root.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self.root

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)
