from typing import Tuple

import attrs


@attrs.define(frozen=True)
class BatchSelectionResult:
    """Outcome of selecting several seats at once"""

    requested: Tuple[str, ...]
    selected: Tuple[str, ...]

    @property
    def fulfilled(self) -> bool:
        return len(self.selected) == len(self.requested)

    @property
    def missing(self) -> Tuple[str, ...]:
        return tuple(code for code in self.requested if code not in self.selected)
