"""Request headers, grouped by lower-cased name."""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Read-only header view built from ASGI ``(name, value)`` byte pairs.

    Indexing gives the first value sent under a name, in any case;
    ``getall(name)`` gives all of them in arrival order.
    """

    __slots__ = ("_by_name",)

    def __init__(self, pairs: Iterable[tuple[bytes, bytes]] = ()) -> None:
        by_name: dict[str, tuple[str, ...]] = {}
        for raw_name, raw_value in pairs:
            name = raw_name.decode("latin-1").lower()
            by_name[name] = (*by_name.get(name, ()), raw_value.decode("latin-1"))
        self._by_name = by_name

    def __getitem__(self, name: str) -> str:
        return self._by_name[name.lower()][0]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_name

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"Headers({self._by_name!r})"

    def getall(self, name: str) -> tuple[str, ...]:
        """Every value sent under *name*; empty when absent."""
        return self._by_name.get(name.lower(), ())
