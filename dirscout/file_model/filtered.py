"""Initial-letter index for "jump to the next entry starting with X"."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FilteredEntries:
    """Cyclic cursor over explorer row indices sharing one initial character.

    ``hint_pos`` is the 1-based position of the last returned match, used for
    the "Match i/n" status hint; ``0`` means no match was returned yet.
    """

    initial: str | None = None
    indices: list[int] = field(default_factory=list)
    hint_pos: int = 0

    def matches_letter(self, character: str) -> bool:
        if self.initial is None or not character:
            return False
        return self.initial.lower() == character.lower()

    def find_next(self, selected: int) -> int | None:
        """Return the next match strictly after ``selected``, cycling to the first."""
        if not self.indices:
            return None

        if selected in self.indices:
            next_pos = (self.indices.index(selected) + 1) % len(self.indices)
            self.hint_pos = next_pos + 1
            return self.indices[next_pos]

        for pos, index in enumerate(self.indices):
            if index > selected:
                self.hint_pos = pos + 1
                return index

        self.hint_pos = 1
        return self.indices[0]

    @property
    def total(self) -> int:
        return len(self.indices)

    def reset(self) -> None:
        self.initial = None
        self.indices = []
        self.hint_pos = 0


__all__ = ["FilteredEntries"]
