"""Interactive terminal selector.

Prints the extracted items as a numbered list and reads the user's choice:

  - empty input or ``all``  — accept everything (the default, every box ticked)
  - ``none``                — accept nothing
  - ``1,3`` / ``2-4``       — accept the listed numbers and ranges

Invalid input is reported and the question is asked again.  End of input
(e.g. stdin closed) counts as ``none``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from finishem_sync.registry import register_selector
from finishem_sync.schemas.todo import TodoItem
from finishem_sync.selection.base import BaseSelector

logger = logging.getLogger(__name__)


def parse_choice(answer: str, count: int) -> list[int]:
    """Parse a selection answer into sorted zero-based indices.

    Raises ``ValueError`` for anything that is not a valid selection.
    """
    answer = answer.strip().lower()
    if answer in ("", "all", "a"):
        return list(range(count))
    if answer in ("none", "n"):
        return []

    chosen: set[int] = set()
    for part in answer.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start_s, _, end_s = part.partition("-")
            start, end = int(start_s), int(end_s)
            if start > end:
                raise ValueError(f"range {part!r} runs backwards")
            numbers = range(start, end + 1)
        else:
            numbers = range(int(part), int(part) + 1)
        for number in numbers:
            if not 1 <= number <= count:
                raise ValueError(f"{number} is not between 1 and {count}")
            chosen.add(number - 1)
    return sorted(chosen)


@register_selector("prompt")
class PromptSelector(BaseSelector):
    """Ask on the terminal which items to send."""

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ) -> None:
        super().__init__(config or {})
        self._title: str = self._config.get("title", "Send to Finish-Em")
        self._input = input_func
        self._output = output_func

    def select(self, candidates: Sequence[TodoItem]) -> list[str]:
        if not candidates:
            return []

        self._output(self._title)
        self._output(f"Found {len(candidates)} todos:")
        for number, todo in enumerate(candidates, start=1):
            self._output(f"  [{number}] {todo.text}")

        while True:
            try:
                answer = self._input("Send which items? [all/none/1,2,4-6]: ")
            except EOFError:
                logger.warning("%s: no input available, accepting nothing", self.name)
                return []
            try:
                indices = parse_choice(answer, len(candidates))
            except ValueError as exc:
                self._output(f"Invalid selection: {exc}")
                continue
            return [candidates[i].text for i in indices]
