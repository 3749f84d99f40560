"""Configuration management for the alias resolver."""

from pathlib import Path
from typing import List, Optional
import yaml
from pydantic import BaseModel, Field, ValidationError

from docalias.errors import ConfigError


class PathConfig(BaseModel):
    """How module specifiers are turned into registry keys."""

    default_extension: str = ".js"
    source_extensions: List[str] = Field(default_factory=lambda: [".js"])


class ResolverConfig(BaseModel):
    """Main resolver configuration."""

    paths: PathConfig = Field(default_factory=PathConfig)

    indexed_scopes: List[str] = Field(default_factory=lambda: ["global", "static"])
    declaration_kinds: List[str] = Field(default_factory=lambda: ["class", "function"])

    strip_typedef_imports: bool = True
    disable_generation: bool = False

    rule_files: List[str] = Field(default_factory=list)

    @classmethod
    def load_from_file(cls, config_path: Path) -> "ResolverConfig":
        """Load configuration from YAML file."""
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    @classmethod
    def load_default(cls) -> "ResolverConfig":
        """Load default configuration."""
        return cls()

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)


def load_config(config_path: Optional[str] = None) -> ResolverConfig:
    """Load configuration from file or defaults."""
    if config_path:
        return ResolverConfig.load_from_file(Path(config_path))

    standard_paths = [
        Path("docalias.yaml"),
        Path("config/docalias.yaml"),
        Path.home() / ".docalias" / "config.yaml"
    ]

    for path in standard_paths:
        if path.exists():
            return ResolverConfig.load_from_file(path)

    return ResolverConfig.load_default()
