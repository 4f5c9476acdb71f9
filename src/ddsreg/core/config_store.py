"""Global configuration data structures and loading.

Provides immutable config data loaded from ~/.ddsreg/config.toml at the CLI
entry point. A missing file means defaults.
"""

import os
import tomllib
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path

import tomlkit
import tomlkit.exceptions

OUTPUT_FORMATS = ("text", "json")
CONFIG_KEYS = ("reference_paths", "output_format")


@dataclass(frozen=True)
class DdsregConfig:
    """Immutable configuration.

    Attributes:
        reference_paths: Reference documents to load instead of the bundled ones
        output_format: Default output format for query commands ("text" or "json")
    """

    reference_paths: tuple[Path, ...] = ()
    output_format: str = "text"


def _validate_output_format(value: object, origin: str) -> str:
    if value not in OUTPUT_FORMATS:
        raise ValueError(
            f"Invalid output_format {value!r} in {origin}. "
            f"Must be one of: {', '.join(OUTPUT_FORMATS)}"
        )
    return str(value)


def config_from_data(data: dict, origin: str) -> DdsregConfig:
    """Build a config from parsed TOML data.

    Raises:
        ValueError: If a key has the wrong type or value
    """
    raw_paths = data.get("reference_paths", [])
    if not isinstance(raw_paths, list) or not all(isinstance(p, str) for p in raw_paths):
        raise ValueError(f"'reference_paths' in {origin} must be a list of strings")
    output_format = _validate_output_format(data.get("output_format", "text"), origin)
    return DdsregConfig(
        reference_paths=tuple(Path(p).expanduser() for p in raw_paths),
        output_format=output_format,
    )


def update_config(config: DdsregConfig, key: str, value: str) -> DdsregConfig:
    """Return a copy of config with one key set from its command-line text.

    reference_paths takes a comma-separated list; an empty string clears it.

    Raises:
        KeyError: If key is not a config key
        ValueError: If value is invalid for the key
    """
    match key:
        case "reference_paths":
            paths = tuple(Path(p.strip()).expanduser() for p in value.split(",") if p.strip())
            return replace(config, reference_paths=paths)
        case "output_format":
            return replace(config, output_format=_validate_output_format(value, "command line"))
        case _:
            raise KeyError(key)


def _stored_value(config: DdsregConfig, key: str) -> str | list[str]:
    """TOML value for one config key."""
    match key:
        case "reference_paths":
            return [str(p) for p in config.reference_paths]
        case "output_format":
            return config.output_format
        case _:
            raise KeyError(key)


class ConfigStore(ABC):
    """Abstract interface for config access.

    Lets tests use an in-memory store without touching the filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if a config file exists."""
        ...

    @abstractmethod
    def load(self) -> DdsregConfig:
        """Load config, falling back to defaults when none is stored.

        Raises:
            ValueError: If stored config is malformed
        """
        ...

    @abstractmethod
    def load_data(self) -> dict:
        """Stored key/value table as written, without validating the values.

        Raises:
            ValueError: If the stored file is not valid TOML
        """
        ...

    @abstractmethod
    def save(self, config: DdsregConfig, keys: Sequence[str] = CONFIG_KEYS) -> None:
        """Persist the given keys of config, leaving other stored keys as they are."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Path of the config file (for messages)."""
        ...


class RealConfigStore(ConfigStore):
    """Production implementation that reads/writes ~/.ddsreg/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path

    def path(self) -> Path:
        if self._config_path is not None:
            return self._config_path
        return Path.home() / ".ddsreg" / "config.toml"

    def exists(self) -> bool:
        return self.path().exists()

    def load_data(self) -> dict:
        config_path = self.path()
        if not config_path.exists():
            return {}
        try:
            return tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Malformed config file {config_path}: {e}") from e

    def load(self) -> DdsregConfig:
        return config_from_data(self.load_data(), str(self.path()))

    def save(self, config: DdsregConfig, keys: Sequence[str] = CONFIG_KEYS) -> None:
        """Write keys of config, keeping comments and everything else in the file.

        Raises:
            PermissionError: If the file or its directory is not writable
            ValueError: If the existing file is not valid TOML
        """
        config_path = self.path()
        parent = config_path.parent

        if parent.exists() and not os.access(parent, os.W_OK):
            raise PermissionError(f"Cannot write to directory: {parent}")
        parent.mkdir(parents=True, exist_ok=True)

        if config_path.exists():
            try:
                doc = tomlkit.parse(config_path.read_text(encoding="utf-8"))
            except tomlkit.exceptions.ParseError as e:
                raise ValueError(f"Malformed config file {config_path}: {e}") from e
        else:
            doc = tomlkit.document()
        for key in keys:
            doc[key] = _stored_value(config, key)
        config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")


class FakeConfigStore(ConfigStore):
    """In-memory config store for tests.

    Records saved configs so tests can assert on them.
    """

    def __init__(self, config: DdsregConfig | None = None) -> None:
        self._config = config
        self._saved: list[DdsregConfig] = []

    @property
    def saved(self) -> list[DdsregConfig]:
        return self._saved

    def path(self) -> Path:
        return Path("/test/.ddsreg/config.toml")

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> DdsregConfig:
        if self._config is None:
            return DdsregConfig()
        return self._config

    def load_data(self) -> dict:
        if self._config is None:
            return {}
        return {key: _stored_value(self._config, key) for key in CONFIG_KEYS}

    def save(self, config: DdsregConfig, keys: Sequence[str] = CONFIG_KEYS) -> None:
        merged = replace(self.load(), **{key: getattr(config, key) for key in keys})
        self._config = merged
        self._saved.append(merged)
