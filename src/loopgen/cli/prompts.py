"""Interactive question layer.

Generators only see the Asker protocol: ``ask(question) -> answer``.
RichAsker answers questions on the terminal with rich prompts; tests
swap in a scripted asker.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.text import Text


@dataclass
class Question:
    """A single prompt.

    ``kind`` selects free text ("input"), a pick from ``choices``
    ("list"), or a yes/no ("confirm"). ``validate`` returns None for an
    acceptable answer or a message to show before asking again.
    """

    name: str
    message: str
    kind: Literal["input", "list", "confirm"] = "input"
    choices: list[str] = field(default_factory=list)
    default: Any = None
    validate: Callable[[str], str | None] | None = None


class Asker(Protocol):
    def ask(self, question: Question) -> Any: ...


class RichAsker:
    """Ask questions on the terminal using rich prompts."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def ask(self, question: Question) -> Any:
        prompt = Text(question.message)
        if question.kind == "confirm":
            return Confirm.ask(
                prompt, default=bool(question.default), console=self.console
            )

        kwargs: dict[str, Any] = {"console": self.console}
        if question.kind == "list":
            kwargs["choices"] = question.choices
        if question.default is not None:
            kwargs["default"] = question.default

        while True:
            answer = Prompt.ask(prompt, **kwargs)
            if question.validate is None:
                return answer
            problem = question.validate(answer)
            if problem is None:
                return answer
            self.console.print(f"[red]>> {escape(problem)}[/red]")


def make_asker() -> Asker:
    """Return the asker used by CLI commands."""
    return RichAsker()
