from __future__ import annotations

from typing import Any

import pytest

from express_starter.answers import Answers
from express_starter.registry_client import Dependency, RegistryError

VERSIONS = {
    "express": "4.18.0",
    "cors": "2.8.5",
    "dotenv": "16.0.0",
    "nodemon": "3.0.0",
}


class RecordingPresenter:
    """Stands in for the rich presenter: scripted replies, recorded calls."""

    def __init__(self, replies: list[Any] | None = None) -> None:
        self.replies = list(replies or [])
        self.calls: list[tuple[str, Any]] = []

    def intro(self) -> None:
        self.calls.append(("intro", None))

    def _next(self, message: str, default: Any) -> Any:
        if not self.replies:
            raise EOFError
        reply = self.replies.pop(0)
        return default if reply is None else reply

    def ask_text(self, message: str, default: str) -> str:
        self.calls.append(("ask_text", message))
        return self._next(message, default)

    def ask_confirm(self, message: str, default: bool) -> bool:
        self.calls.append(("ask_confirm", message))
        return self._next(message, default)

    def success(self, project_name: str) -> None:
        self.calls.append(("success", project_name))

    def failure(self, error: BaseException) -> None:
        self.calls.append(("failure", error))


class FakeRegistryClient:
    def __init__(self, versions: dict[str, str] | None = None, failing: set[str] | None = None) -> None:
        self.versions = dict(VERSIONS if versions is None else versions)
        self.failing = set(failing or ())
        self.batches: list[list[str]] = []

    def resolve_all(self, names) -> list[Dependency]:
        names = list(names)
        self.batches.append(names)
        for n in names:
            if n in self.failing:
                raise RegistryError(f"Registry error 500 GET /{n}: boom")
        return [Dependency(name=n, version=self.versions[n]) for n in names]


@pytest.fixture
def full_answers() -> Answers:
    return Answers(project_name="demo", use_cors=True, use_error_handler=True, use_env_file=True)


@pytest.fixture
def bare_answers() -> Answers:
    return Answers(project_name="demo", use_cors=False, use_error_handler=False, use_env_file=False)


@pytest.fixture
def fake_client() -> FakeRegistryClient:
    return FakeRegistryClient()
