"""Application context with dependency injection."""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ddsreg.core.config_store import ConfigStore, DdsregConfig, FakeConfigStore, RealConfigStore
from ddsreg.core.identifier_registry import IdentifierRegistry
from ddsreg.core.sources import load_registry


@dataclass(frozen=True)
class DdsregContext:
    """Immutable context holding everything commands need.

    Created at CLI entry point and threaded through commands via click's obj.
    """

    config_store: ConfigStore
    config: DdsregConfig
    registry: IdentifierRegistry

    @property
    def output_json(self) -> bool:
        return self.config.output_format == "json"

    @staticmethod
    def for_test(
        registry: IdentifierRegistry | None = None,
        config: DdsregConfig | None = None,
        config_store: ConfigStore | None = None,
    ) -> "DdsregContext":
        """Create test context with test defaults for anything not given.

        Args:
            registry: Registry to query. If None, loads the bundled documents.
            config: Config. If None, uses defaults.
            config_store: Config store. If None, creates FakeConfigStore holding config.

        Returns:
            DdsregContext for use as click obj in CliRunner.invoke
        """
        if config is None:
            config = DdsregConfig()
        if config_store is None:
            config_store = FakeConfigStore(config=config)
        if registry is None:
            registry = load_registry()
        return DdsregContext(config_store=config_store, config=config, registry=registry)


def create_context(reference_paths: Sequence[Path] = ()) -> DdsregContext:
    """Create production context.

    Args:
        reference_paths: Documents to load; overrides the configured reference_paths

    Raises:
        ValueError: If the config file is malformed
        FileNotFoundError: If a reference document does not exist
        MalformedEntryError: If a reference document cannot be parsed
    """
    config_store = RealConfigStore()
    config = config_store.load()
    paths = tuple(reference_paths) or config.reference_paths
    registry = load_registry(paths)
    return DdsregContext(config_store=config_store, config=config, registry=registry)


def create_config_context() -> DdsregContext:
    """Create the context for the config commands.

    Neither the stored config nor the reference documents are loaded, so a
    config that breaks every other command can still be shown and changed.
    The config commands read the store directly.
    """
    return DdsregContext(
        config_store=RealConfigStore(),
        config=DdsregConfig(),
        registry=IdentifierRegistry((), ()),
    )
