from __future__ import annotations

"""Exception hierarchy for treegen."""

from typing import Sequence


class TreegenError(Exception):
    """Base exception for all treegen failures."""
    pass


class InvalidConfiguration(TreegenError, ValueError):
    """A generation parameter is outside its allowed domain."""

    def __init__(self, parameter: str, reason: str) -> None:
        self.parameter = parameter
        self.reason = reason
        super().__init__(f"invalid value for {parameter!r}: {reason}")


class UnsupportedFormat(TreegenError, ValueError):
    """The requested output format is not one of the known grammars."""

    def __init__(self, value: str, supported: Sequence[str]) -> None:
        self.value = value
        self.supported = tuple(supported)
        super().__init__(
            f"unsupported format {value!r} (expected one of: {', '.join(self.supported)})"
        )


class GraphError(TreegenError):
    """Misuse of the raw tree container."""
    pass


class UnknownNode(GraphError):
    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"node not found: {identity}")


class DuplicateIdentity(GraphError):
    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"identity collision: {identity}")


class ChildAlreadyExists(GraphError):
    def __init__(self, parent: str, child: str) -> None:
        self.parent = parent
        self.child = child
        super().__init__(f"child already exists from {parent} to {child}")


class MultipleParents(GraphError):
    def __init__(self, child: str, existing: str, parent: str) -> None:
        self.child = child
        self.existing = existing
        self.parent = parent
        super().__init__(
            f"node {child} already has parent {existing}, cannot link to {parent}"
        )
