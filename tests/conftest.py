"""Shared fixtures: a sandbox project tree and a scripted asker."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from loopgen.cli.prompts import Question


class ScriptedAsker:
    """Answers questions from a dict keyed by question name.

    Validators still run, so an invalid canned answer fails loudly
    instead of slipping through.
    """

    def __init__(self, answers: dict[str, Any]) -> None:
        self.answers = answers
        self.asked: list[str] = []

    def ask(self, question: Question) -> Any:
        self.asked.append(question.name)
        if question.name not in self.answers:
            return question.default
        answer = self.answers[question.name]
        if question.validate is not None:
            problem = question.validate(answer)
            if problem is not None:
                raise AssertionError(f"{question.name}: {problem}")
        if question.kind == "list" and answer not in question.choices:
            raise AssertionError(f"{question.name}: {answer!r} not in {question.choices}")
        return answer


@pytest.fixture
def scripted_asker() -> type[ScriptedAsker]:
    """The ScriptedAsker class, for tests that patch make_asker."""
    return ScriptedAsker


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A minimal project with a Car model in common/models."""
    (tmp_path / "server").mkdir()
    (tmp_path / "server" / "model-config.json").write_text(
        json.dumps({"Car": {"dataSource": "db", "public": True}}), encoding="utf-8"
    )
    models_dir = tmp_path / "common" / "models"
    models_dir.mkdir(parents=True)
    (models_dir / "car.json").write_text(
        json.dumps(
            {
                "name": "Car",
                "base": "PersistedModel",
                "properties": {"make": {"type": "string"}},
                "validations": [],
            },
            indent=2,
        ),
        encoding="utf-8",
    )
    return tmp_path
