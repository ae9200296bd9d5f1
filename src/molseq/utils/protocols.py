from typing import Protocol, runtime_checkable


@runtime_checkable
class HasAlphabet(Protocol):
    """Protocol for objects that possess an Alphabet (e.g. Seq)."""
    @property
    def alphabet(self) -> 'Alphabet': ...


@runtime_checkable
class HasLocations(Protocol):
    """Protocol for objects that describe how to assemble a spliced product (e.g. Locations)."""

    @property
    def locations(self) -> list['Location']: ...
