"""YAML configuration loader for the assertion plugin."""

import logging
from pathlib import Path
from typing import Optional

import yaml

from declarative_assertion.config.models import AssertionConfig

logger = logging.getLogger(__name__)

# Searched in this order in every directory, nearest directory first
CONFIG_NAMES = (
    "assertions.yaml",
    "assertions.yml",
    ".assertions.yaml",
    ".assertions.yml",
)


class ConfigLoader:
    """Locate, read and merge assertion configurations."""

    @classmethod
    def load(
        cls,
        config_path: Optional[str | Path] = None,
        root_dir: Optional[Path] = None,
    ) -> AssertionConfig:
        """
        Load the configuration.

        An explicit ``config_path`` must exist. Without one, the nearest
        config file at or above ``root_dir`` is used, and the model defaults
        when there is none.

        Args:
            config_path: Explicit config file, absolute or relative to root_dir.
            root_dir: Directory the search starts from. Defaults to the current directory.

        Raises:
            FileNotFoundError: If config_path is given but is not a file.
            pydantic.ValidationError: If the file content is not a valid configuration.
        """
        root_dir = (root_dir or Path.cwd()).resolve()

        if config_path is not None:
            return cls.load_file(cls._resolve(config_path, root_dir))

        found = cls.find_config_file(root_dir)
        if found is None:
            logger.debug(f"No assertion configuration at or above {root_dir}")
            return AssertionConfig()

        return cls.load_file(found)

    @staticmethod
    def _resolve(config_path: str | Path, root_dir: Path) -> Path:
        path = Path(config_path).expanduser()
        if not path.is_absolute():
            path = root_dir / path
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        return path

    @classmethod
    def find_config_file(cls, start_dir: Path) -> Optional[Path]:
        """Return the nearest config file at or above ``start_dir``, if any."""
        start_dir = start_dir.resolve()

        for directory in (start_dir, *start_dir.parents):
            for name in CONFIG_NAMES:
                candidate = directory / name
                if candidate.is_file():
                    return candidate

        return None

    @classmethod
    def load_file(cls, path: Path) -> AssertionConfig:
        """Validate the YAML document in ``path``; an empty file means defaults."""
        logger.info(f"Loading assertion configuration from: {path}")

        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        return AssertionConfig.model_validate({} if data is None else data)

    @classmethod
    def merge_configs(cls, base: AssertionConfig, override: AssertionConfig) -> AssertionConfig:
        """
        Merge two configurations, with override taking precedence.

        Only fields explicitly set on ``override`` replace values from ``base``.

        Args:
            base: Base configuration.
            override: Configuration to override base with.

        Returns:
            Merged AssertionConfig instance.
        """
        merged = {**base.model_dump(), **override.model_dump(exclude_unset=True)}
        return AssertionConfig.model_validate(merged)
