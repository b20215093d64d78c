"""
Token model for dialogue scripts.

Only the commands that carry entity identifiers are modelled structurally.
Everything else, plain text included, is kept as ``Other`` with its exact
source text so it packs back unchanged.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple, Union


@dataclass(frozen=True)
class Window:
    """Opens a dialogue window for ``speaker``."""
    speaker: str
    body: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Animation:
    """Plays an animation on ``target``."""
    target: str
    rest: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Alias:
    """Displays another name for the entity ``actual``."""
    actual: str
    rest: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Other:
    """Any text run or command the translation pass does not look into."""
    raw: str


Token = Union[Window, Animation, Alias, Other]

# Command names with a structural token class
WINDOW_COMMAND = "Window"
ANIMATION_COMMAND = "Animation"
ALIAS_COMMAND = "Alias"


@dataclass(eq=False)
class TokenStream:
    """Ordered mapping of entry key -> tokens."""
    entries: Dict[str, List[Token]] = field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        # dict equality ignores order, entry order matters here
        if not isinstance(other, TokenStream):
            return NotImplemented
        return list(self.entries.items()) == list(other.entries.items())

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def tokens(self) -> Iterator[Token]:
        """Iterate over all tokens of all entries in order."""
        for tokens in self.entries.values():
            yield from tokens
