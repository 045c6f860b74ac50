"""Application context with dependency injection."""

from dataclasses import dataclass

from rclonekit.client import Rclone
from rclonekit.config import (
    ConfigStore,
    FilesystemConfigStore,
    InMemoryConfigStore,
    RcloneKitConfig,
)
from rclonekit.output import echo_sink
from rclonekit.runner.abc import OutputSink, ProcessRunner
from rclonekit.runner.real import RealProcessRunner


@dataclass(frozen=True)
class RcloneContext:
    """Immutable context holding all dependencies for rclonekit commands.

    Created at CLI entry point and threaded through the application.
    """

    rclone: Rclone
    config_store: ConfigStore
    config: RcloneKitConfig

    @staticmethod
    def for_test(
        runner: ProcessRunner,
        *,
        config: RcloneKitConfig | None = None,
        echo: OutputSink | None = None,
    ) -> "RcloneContext":
        """Create a context around a test runner and in-memory config.

        Args:
            runner: Usually a FakeProcessRunner with canned results
            config: Config to expose; defaults when None
            echo: Sink for verbose output; discarded when None
        """
        store = InMemoryConfigStore(config)
        loaded = store.load()
        return RcloneContext(
            rclone=Rclone(runner, tool=loaded.tool, echo=echo, default_warn=loaded.warn),
            config_store=store,
            config=loaded,
        )


def create_context() -> RcloneContext:
    """Create production context with the real runner and on-disk config.

    Raises:
        ValueError: If the config file is malformed
    """
    store = FilesystemConfigStore()
    config = store.load()
    rclone = Rclone(
        RealProcessRunner(),
        tool=config.tool,
        echo=echo_sink,
        default_warn=config.warn,
    )
    return RcloneContext(rclone=rclone, config_store=store, config=config)
