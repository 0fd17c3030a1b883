"""Configuration objects for the lenient XML parser tooling.

The parser itself takes no options; these dataclasses configure how the
command-line tool renders parsed documents and how verbose it logs.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

OUTPUT_FORMATS = ("json", "tree", "summary")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    def __init__(self, message: str, field_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.field_name = field_name


@dataclass
class OutputConfig:
    """How parsed documents are rendered."""

    format: str = "json"
    indent: int = 2
    include_declaration: bool = True

    def __post_init__(self) -> None:
        """Validate output configuration."""
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(
                f"format must be one of {', '.join(OUTPUT_FORMATS)}"
            )
        if self.indent < 0:
            raise ValueError("indent must be >= 0")


@dataclass
class CLIConfig:
    """Configuration for the ``lenient-xml`` command-line tool."""

    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "WARNING"
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate CLI configuration."""
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        if not self.encoding:
            raise ValueError("encoding cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-compatible dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Serialize configuration to JSON."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CLIConfig":
        """Create configuration from a dictionary.

        Unknown keys are rejected so typos in config files surface early.

        Raises:
            ConfigValidationError: If a key is unknown or a value is invalid
        """
        known = {"output", "log_level", "encoding"}
        for key in data:
            if key not in known:
                raise ConfigValidationError(
                    f"Unknown configuration key: {key}", field_name=key
                )

        output_data = data.get("output", {})
        if not isinstance(output_data, dict):
            raise ConfigValidationError(
                "output must be a mapping", field_name="output"
            )
        output_known = {"format", "indent", "include_declaration"}
        for key in output_data:
            if key not in output_known:
                raise ConfigValidationError(
                    f"Unknown output configuration key: {key}",
                    field_name=f"output.{key}"
                )

        try:
            output = OutputConfig(**output_data)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e), field_name="output") from e

        kwargs = {k: v for k, v in data.items() if k != "output"}
        try:
            return cls(output=output, **kwargs)
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "CLIConfig":
        """Create configuration from a JSON string.

        Raises:
            ConfigValidationError: If the JSON is malformed or invalid
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON configuration: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration must be a JSON object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "CLIConfig":
        """Load configuration from a JSON file; a missing file yields defaults.

        Raises:
            ConfigValidationError: If the file cannot be read or is invalid
        """
        path = Path(config_path)
        if not path.exists():
            return cls()
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigValidationError(
                f"Could not read configuration file {path}: {e}"
            ) from e
        return cls.from_json(content)
