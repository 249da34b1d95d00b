"""
answers.py

Responsibility: Define the fixed questions and turn the user's replies into a typed `Answers`.

Answers can come from three places:
- Interactive prompts, asked in a fixed order through the presenter (`console.py`).
- A YAML answers file (same keys as the questions), for unattended runs.
- The question defaults (`--yes`).

The orchestrator treats the resulting `Answers` as the single source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import yaml


class AnswersError(ValueError):
    pass


@dataclass(frozen=True)
class Answers:
    """The user's choices for one generated project."""

    project_name: str
    use_cors: bool
    use_error_handler: bool
    use_env_file: bool


@dataclass(frozen=True)
class Question:
    key: str
    message: str
    kind: str  # "text" or "confirm"
    default: Any


QUESTIONS: tuple[Question, ...] = (
    Question("project_name", "Enter project name:", "text", "myapp"),
    Question("use_cors", "Do you want to enable CORS?", "confirm", False),
    Question("use_error_handler", "Do you want to use a basic error handler?", "confirm", True),
    Question("use_env_file", "Do you want to use an environment file?", "confirm", True),
)


class Asker(Protocol):
    def ask_text(self, message: str, default: str) -> str: ...

    def ask_confirm(self, message: str, default: bool) -> bool: ...


def default_answers() -> Answers:
    return Answers(**{q.key: q.default for q in QUESTIONS})


def collect_answers(asker: Asker) -> Answers:
    """
    Ask every question in order and return the replies.

    The project name is accepted as typed, including an empty string.
    An interrupted prompt (end of input, Ctrl-C) raises AnswersError.
    """
    values: dict[str, Any] = {}
    try:
        for q in QUESTIONS:
            if q.kind == "text":
                values[q.key] = asker.ask_text(q.message, q.default)
            else:
                values[q.key] = bool(asker.ask_confirm(q.message, q.default))
    except (EOFError, KeyboardInterrupt) as e:
        raise AnswersError("Input collection was interrupted; nothing was created.") from e
    return Answers(**values)


def _coerce(question: Question, value: Any) -> Any:
    if question.kind == "text":
        return "" if value is None else str(value)
    if not isinstance(value, bool):
        raise AnswersError(f"`{question.key}` must be true or false, got {value!r}.")
    return value


def load_answers(path: str | Path) -> Answers:
    """
    Load answers from a YAML mapping, e.g.:

        project_name: demo
        use_cors: true
        use_error_handler: true
        use_env_file: false

    Keys that are left out take the question's default.
    """
    p = Path(path)
    if not p.exists():
        raise AnswersError(f"Answers file does not exist: {p}")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise AnswersError(f"Could not read answers file {p}: {e}") from e
    except yaml.YAMLError as e:
        raise AnswersError(f"Answers file is not valid YAML: {p}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise AnswersError("Answers file must be a mapping/object at the top level.")

    known = {q.key for q in QUESTIONS}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise AnswersError(f"Unknown keys in answers file: {', '.join(unknown)}")

    return Answers(**{q.key: _coerce(q, data.get(q.key, q.default)) for q in QUESTIONS})
