import os

import pytest

from concurrent_memo.constants import EnvVars


@pytest.fixture(autouse=True)
def _isolated_memo_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep MEMO_* variables from the developer's shell out of the tests.

    MemoConfig.from_env() and ConfigLoader.load() read these variables; tests
    that need them set them explicitly.
    """
    for name in (EnvVars.VERBOSITY, EnvVars.STRONG_FALLBACK, EnvVars.KEY_REPR_LIMIT):
        if os.getenv(name) is not None:
            monkeypatch.delenv(name)


class Payload:
    """Weak-referenceable stand-in for an expensive computed result."""

    def __init__(self, value: object) -> None:
        self.value = value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Payload) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"Payload({self.value!r})"


@pytest.fixture
def payload() -> type[Payload]:
    return Payload
