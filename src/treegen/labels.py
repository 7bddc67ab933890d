from __future__ import annotations

"""Node identities and display labels drawn from the shared random stream."""

import uuid
from typing import Optional, Set

from .random_source import RandomSource

ROOT_LABEL = "Root"

ADJECTIVES = (
    "able", "bold", "brave", "bright", "calm", "clean", "clever", "cool",
    "crisp", "curious", "daring", "eager", "fair", "fast", "fine", "firm",
    "fluent", "free", "fresh", "gentle", "glad", "golden", "grand", "happy",
    "hardy", "honest", "humble", "jolly", "keen", "kind", "lively", "loyal",
    "lucky", "merry", "mighty", "modest", "noble", "patient", "polite",
    "proud", "quick", "quiet", "rapid", "ready", "robust", "safe", "sharp",
    "shy", "smart", "smooth", "solid", "steady", "sunny", "swift", "tidy",
    "upbeat", "vivid", "warm", "wise", "witty",
)

NOUNS = (
    "adder", "alpaca", "badger", "beagle", "beaver", "bison", "bobcat",
    "buffalo", "camel", "caribou", "cheetah", "cobra", "condor", "cougar",
    "coyote", "crane", "dingo", "dolphin", "donkey", "eagle", "egret", "elk",
    "falcon", "ferret", "finch", "fox", "gazelle", "gecko", "gibbon",
    "gopher", "heron", "hornet", "husky", "ibex", "iguana", "impala",
    "jackal", "jaguar", "koala", "lemur", "leopard", "llama", "lynx",
    "macaw", "marmot", "marten", "mink", "moose", "narwhal", "newt",
    "ocelot", "octopus", "oriole", "osprey", "otter", "owl", "panda",
    "panther", "parrot", "pelican", "penguin", "puffin", "python", "quail",
    "rabbit", "raven", "salmon", "seal", "shark", "sparrow", "squid",
    "stork", "swan", "tapir", "tiger", "toucan", "turtle", "viper",
    "walrus", "weasel", "whale", "wombat", "yak", "zebra",
)


class LabelAllocator:
    """
    Hands out unique node identities and pseudo-word labels.

    Identities are 16 bytes from the run's RandomSource rendered as a UUID4
    hex string; labels are single nouns picked from the same source. Both
    therefore take part in the deterministic draw sequence of a run.
    """

    def __init__(self, source: RandomSource) -> None:
        self._source = source
        self._issued: Set[str] = set()

    def new_identity(self) -> str:
        while True:
            identity = uuid.UUID(bytes=self._source.next_bytes(16), version=4).hex
            if identity not in self._issued:
                self._issued.add(identity)
                return identity

    def new_label(self, is_root: bool = False, custom_root_name: Optional[str] = None) -> str:
        if is_root:
            return custom_root_name if custom_root_name is not None else ROOT_LABEL
        return NOUNS[self._source.next_index(len(NOUNS))]

    def new_graph_name(self) -> str:
        adjective = ADJECTIVES[self._source.next_index(len(ADJECTIVES))]
        noun = NOUNS[self._source.next_index(len(NOUNS))]
        return f"{adjective}_{noun}"
