"""Configuration classes for SDF parsing, serialization and world generation.

This module provides configuration objects for every component, validated on
construction so that a bad value is reported before any work starts.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

_COMPONENTS = ("parser", "serializer", "maze", "world")


@dataclass
class ParserConfig:
    """Configuration for the parser state machine."""

    run_precheck: bool = True
    max_depth: int = 256
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")
        if not self.encoding:
            raise ValueError("encoding cannot be empty")


@dataclass
class SerializerConfig:
    """Configuration for rendering a tree back to markup."""

    indent: str = "\t"
    newline: str = "\n"

    def __post_init__(self) -> None:
        """Validate serializer configuration."""
        if self.indent.strip():
            raise ValueError("indent must contain only whitespace")
        if self.newline not in ("\n", "\r\n"):
            raise ValueError("newline must be '\\n' or '\\r\\n'")


@dataclass
class MazeConfig:
    """Configuration for maze generation."""

    width: int = 11
    height: int = 11
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate maze dimensions."""
        for label, value in (("width", self.width), ("height", self.height)):
            if value <= 0:
                raise ValueError(f"{label} must be positive")
            if value % 2 == 0:
                raise ValueError(f"{label} must be odd")
            if value < 3:
                raise ValueError(f"{label} must be >= 3")


@dataclass
class WorldConfig:
    """Configuration for turning a maze into an SDF world."""

    box_dimension: float = 0.5
    box_name_template: str = "'Box_Red_{box_id}'"
    pose_template: str = "{x:.3f} {y:.3f} {z:.3f} 0 0 0"
    world_fragment: str = "world.sdf"
    box_fragment: str = "box.sdf"
    extra_fragments: Tuple[str, ...] = (
        "light.sdf",
        "gui.sdf",
        "ground.sdf",
        "physics.sdf",
    )
    fragments_dir: Optional[str] = None
    reserved_cells: Tuple[Tuple[int, int], ...] = ((0, 0), (1, 0))
    output_path: str = "maze.world"

    def __post_init__(self) -> None:
        """Validate world configuration."""
        if self.box_dimension <= 0:
            raise ValueError("box_dimension must be > 0")
        if "{box_id}" not in self.box_name_template:
            raise ValueError("box_name_template must contain '{box_id}'")
        for placeholder in ("{x", "{y", "{z"):
            if placeholder not in self.pose_template:
                raise ValueError(f"pose_template must reference {placeholder}}}")
        if not self.world_fragment or not self.box_fragment:
            raise ValueError("world_fragment and box_fragment cannot be empty")
        if not self.output_path:
            raise ValueError("output_path cannot be empty")
        # JSON round trips deliver lists; keep the fields hashable tuples
        self.extra_fragments = tuple(self.extra_fragments)
        self.reserved_cells = tuple(
            (int(row), int(col)) for row, col in self.reserved_cells
        )


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class AppConfig:
    """Complete configuration for the parser, serializer, maze and world builder.

    Immutable: use ``override`` to derive a modified copy.
    """

    parser: ParserConfig = field(default_factory=ParserConfig)
    serializer: SerializerConfig = field(default_factory=SerializerConfig)
    maze: MazeConfig = field(default_factory=MazeConfig)
    world: WorldConfig = field(default_factory=WorldConfig)

    name: Optional[str] = None
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        try:
            self.parser.__post_init__()
            self.serializer.__post_init__()
            self.maze.__post_init__()
            self.world.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        self._validate_cross_component_dependencies()

    def _validate_cross_component_dependencies(self) -> None:
        """Reserved cells must lie inside the maze grid."""
        for row, col in self.world.reserved_cells:
            if not (0 <= row < self.maze.height and 0 <= col < self.maze.width):
                raise ConfigValidationError(
                    f"Reserved cell ({row}, {col}) lies outside a "
                    f"{self.maze.height}x{self.maze.width} maze",
                    field_name="world.reserved_cells",
                    suggestions=["Enlarge the maze", "Remove the reserved cell"],
                )

    def override(self, **kwargs: Any) -> "AppConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override, nested with ``component__field``

        Returns:
            New AppConfig instance with overrides applied

        Example:
            >>> config = AppConfig()
            >>> config.override(maze__width=21, serializer__indent="  ").maze.width
            21
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component '{component}'",
                        field_name=key,
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for key, value in nested_overrides.items():
                if key in _COMPONENTS and isinstance(value, dict):
                    new_fields[key] = replace(getattr(self, key), **value)
                else:
                    new_fields[key] = value
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, (list, tuple)):
                return [_dataclass_to_dict(item) for item in obj]
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files surface
        instead of being silently ignored.
        """
        component_types = {
            "parser": ParserConfig,
            "serializer": SerializerConfig,
            "maze": MazeConfig,
            "world": WorldConfig,
        }
        values: Dict[str, Any] = {}
        try:
            for key, value in data.items():
                if key in component_types:
                    values[key] = component_types[key](**value)
                elif key in ("name", "correlation_id"):
                    values[key] = value
                else:
                    raise ConfigValidationError(
                        f"Unknown configuration key '{key}'", field_name=key
                    )
            return cls(**values)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "AppConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "AppConfig":
        """Create the default configuration (tab indentation, pre-check on)."""
        return cls(name="default")

    @classmethod
    def compact(cls) -> "AppConfig":
        """Create a preset with two-space indentation and no bracket pre-check."""
        return cls(
            parser=ParserConfig(run_precheck=False),
            serializer=SerializerConfig(indent="  "),
            name="compact",
        )
