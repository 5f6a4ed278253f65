"""Configuration management for plasmid editor."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .core.enzymes import build_catalog, load_enzyme_file
from .core.matcher import PatternMatcher
from .exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Command-line argument name -> config field
ARG_MAPPING = {
    'enzymes': 'enzyme_file',
    'fasta_width': 'fasta_width',
    'remap': 'remap_annotations',
    'circular': 'circular_default',
    'log_level': 'log_level',
}


@dataclass
class ToolkitConfig:
    """Editor configuration settings."""

    enzyme_file: Optional[Path] = None
    fasta_width: int = 60
    remap_annotations: bool = True
    circular_default: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.enzyme_file is not None:
            self.enzyme_file = Path(self.enzyme_file)
            if not self.enzyme_file.exists():
                raise ConfigurationError(
                    f"Enzyme file not found: {self.enzyme_file}", parameter="enzyme_file"
                )

        if not isinstance(self.fasta_width, int) or self.fasta_width <= 0:
            raise ConfigurationError(f"Invalid fasta_width: {self.fasta_width}", parameter="fasta_width")

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log_level: {self.log_level}", parameter="log_level")

        self.remap_annotations = bool(self.remap_annotations)
        self.circular_default = bool(self.circular_default)

    @classmethod
    def from_yaml(cls, yaml_file: Path) -> "ToolkitConfig":
        """Load configuration from YAML file."""
        yaml_file = Path(yaml_file)
        if not yaml_file.exists():
            raise ConfigurationError(f"Config file not found: {yaml_file}")

        try:
            with open(yaml_file, 'r') as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, dict):
                raise ConfigurationError("Top level must be a mapping", config_file=str(yaml_file))

            if 'enzyme_file' in data and data['enzyme_file'] is not None:
                enzyme_file = Path(data['enzyme_file'])
                # Relative paths are resolved against the config file
                if not enzyme_file.is_absolute():
                    enzyme_file = yaml_file.parent / enzyme_file
                data['enzyme_file'] = enzyme_file

            return cls(**data)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML config: {e}")
        except TypeError as e:
            raise ConfigurationError(f"Invalid config parameters: {e}")

    @classmethod
    def from_args(cls, args: dict) -> "ToolkitConfig":
        """Create configuration from command-line arguments."""
        return cls(**_given_args(args))

    def merge_args(self, args: dict) -> "ToolkitConfig":
        """Return a copy where explicitly given arguments override this config."""
        merged = {
            'enzyme_file': self.enzyme_file,
            'fasta_width': self.fasta_width,
            'remap_annotations': self.remap_annotations,
            'circular_default': self.circular_default,
            'log_level': self.log_level,
        }
        merged.update(_given_args(args))
        return ToolkitConfig(**merged)

    def build_matcher(self) -> PatternMatcher:
        """Matcher over the common catalog plus any configured enzyme file."""
        extra = load_enzyme_file(self.enzyme_file) if self.enzyme_file else None
        return PatternMatcher(build_catalog(extra))


def _given_args(args: dict) -> dict:
    """Config fields for the arguments that were actually given (not None)."""
    return {
        config_name: args[arg_name]
        for arg_name, config_name in ARG_MAPPING.items()
        if args.get(arg_name) is not None
    }
