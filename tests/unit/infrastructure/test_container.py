"""Tests for dependency injection container.

These tests verify the container creates the logger once, honours the
configuration, and builds every memoizer kind bound to that logger.
"""

import asyncio
from io import StringIO

import pytest
from rich.console import Console

from concurrent_memo.application.ports import LoggerPort
from concurrent_memo.config import MemoConfig
from concurrent_memo.domain.entities import MemoizerKind
from concurrent_memo.infrastructure.container import (
    DependencyContainer,
    create_default_container,
)
from concurrent_memo.infrastructure.logging import ConsoleLogger, NullLogger
from concurrent_memo.memoizers import (
    AsyncLazyMemoizer,
    EagerMemoizer,
    LazyMemoizer,
    OnceMemoizer,
    SingleFlightMemoizer,
    ThreadSafeMemoizer,
)


class MockLogger(NullLogger):
    """Mock logger for testing overrides."""

    def __init__(self):
        super().__init__()
        self.messages = []

    def log_cache_miss(self, name, key):
        self.messages.append(("miss", name, key))


class TestDependencyContainer:
    """Tests for DependencyContainer class."""

    def test_create_container_with_defaults(self):
        """Test creating container with default configuration."""
        container = DependencyContainer()

        assert container.config == MemoConfig()
        assert container.console is not None
        assert container.use_null_logger is False

    def test_create_container_with_null_logger(self):
        """Test creating container with null logger enabled."""
        container = DependencyContainer(use_null_logger=True)

        assert isinstance(container.create_logger(), NullLogger)

    def test_create_container_with_custom_console(self):
        """Test creating container with custom console."""
        custom_console = Console()
        container = DependencyContainer(console=custom_console)

        assert container.console is custom_console


class TestLoggerFactory:
    """Tests for logger factory method."""

    def test_create_logger_returns_console_logger(self):
        """Test that create_logger returns ConsoleLogger by default."""
        logger = DependencyContainer().create_logger()

        assert isinstance(logger, ConsoleLogger)
        assert isinstance(logger, LoggerPort)

    def test_create_logger_is_singleton(self):
        """Test that create_logger returns the same instance (singleton)."""
        container = DependencyContainer()

        assert container.create_logger() is container.create_logger()

    def test_create_logger_respects_config(self):
        """Test that logger is created with configured verbosity and key limit."""
        container = DependencyContainer(
            config=MemoConfig(verbosity=2, key_repr_limit=12)
        )

        logger = container.create_logger()

        assert logger.verbosity == 2
        assert logger.key_repr_limit == 12

    def test_reset_singletons(self):
        container = DependencyContainer()
        first = container.create_logger()

        container.reset_singletons()

        assert container.create_logger() is not first

    def test_override_logger(self):
        container = DependencyContainer()
        mock = MockLogger()

        container.override_logger(mock)
        wrapped = container.create_memoizer(MemoizerKind.EAGER, abs, name="abs")
        wrapped(-2)

        assert mock.messages == [("miss", "abs", -2)]


class TestMemoizerFactory:
    """Tests for memoizer factory method."""

    @pytest.mark.parametrize(
        ("kind", "memoizer_type"),
        [
            (MemoizerKind.EAGER, EagerMemoizer),
            (MemoizerKind.THREAD_SAFE, ThreadSafeMemoizer),
            (MemoizerKind.LAZY, LazyMemoizer),
            (MemoizerKind.WEAK, SingleFlightMemoizer),
            ("weak", SingleFlightMemoizer),
        ],
    )
    def test_create_sync_memoizers(self, kind, memoizer_type):
        container = DependencyContainer(use_null_logger=True)

        wrapped = container.create_memoizer(kind, abs)

        assert isinstance(wrapped.cache, memoizer_type)
        assert wrapped(-3) == 3
        assert wrapped.cache.logger is container.create_logger()

    def test_create_async_memoizer(self):
        container = DependencyContainer(use_null_logger=True)

        async def negate(x):
            return -x

        wrapped = container.create_memoizer(MemoizerKind.ASYNC_LAZY, negate)

        assert isinstance(wrapped.cache, AsyncLazyMemoizer)
        assert asyncio.run(wrapped(4)) == -4

    def test_create_once_memoizer(self):
        container = DependencyContainer(use_null_logger=True)

        wrapped = container.create_memoizer(MemoizerKind.ONCE, lambda: "ready")

        assert isinstance(wrapped.cache, OnceMemoizer)
        assert wrapped() == "ready"

    def test_name_override_does_not_leak(self):
        container = DependencyContainer(use_null_logger=True)

        named = container.create_memoizer(MemoizerKind.WEAK, abs, name="magnitude")
        plain = container.create_memoizer(MemoizerKind.WEAK, abs)

        assert named.cache.name == "magnitude"
        assert plain.cache.name == "abs"
        assert container.config.name is None

    def test_unknown_kind(self):
        container = DependencyContainer(use_null_logger=True)

        with pytest.raises(ValueError):
            container.create_memoizer("lru", abs)

    def test_events_reach_console(self):
        buffer = StringIO()
        container = DependencyContainer(
            config=MemoConfig(verbosity=2), console=Console(file=buffer, width=200)
        )

        wrapped = container.create_memoizer(MemoizerKind.LAZY, abs, name="magnitude")
        wrapped(-1)
        wrapped(-1)

        output = buffer.getvalue()
        assert "magnitude: miss -1" in output
        assert "magnitude: hit -1" in output


class TestCreateDefaultContainer:
    def test_reads_config_file(self, tmp_path):
        config_file = tmp_path / "concurrent_memo.toml"
        config_file.write_text("[logging]\nverbosity = 1\n")

        container = create_default_container(config_file)

        assert container.config.verbosity == 1

    def test_null_logger_flag(self, tmp_path):
        container = create_default_container(
            tmp_path / "missing.toml", use_null_logger=True
        )

        assert isinstance(container.create_logger(), NullLogger)
