"""Configuration loading and management."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

MAX_INPUT_CHARS_ENV_VAR = "MARKDOWN_PREVIEW_MAX_INPUT_CHARS"

THEME_NAMES = ("github", "dark", "minimal")
FOLD_KEY_STRATEGIES = ("content", "position")


@dataclass
class RendererConfig:
    """Configuration for rendering Markdown previews.

    Attributes:
        theme: Name of the stylesheet preset wrapped around rendered output
            (``"github"``, ``"dark"`` or ``"minimal"``).
        max_input_chars: Number of characters rendered before the input is
            truncated and a notice is appended.
        enable_syntax_highlight: Whether fenced code is highlighted by language.
        enable_code_folding: Whether code blocks get a fold control and honor
            stored fold state.
        fold_keys: How code block ids are derived: ``"content"`` hashes the
            language and first line, ``"position"`` numbers blocks in order.
        heading_anchors: Whether headings receive slug ``id`` attributes.

    Examples:
        RendererConfig(theme="dark", fold_keys="position")
    """

    # Presentation
    theme: str = "github"
    heading_anchors: bool = True

    # Code blocks
    enable_syntax_highlight: bool = True
    enable_code_folding: bool = True
    fold_keys: str = "content"

    # Limits
    max_input_chars: int = 1_000_000


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_input_chars` must be a positive integer")
    """


def load_config(search_path: Path) -> RendererConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.markdown-preview]`` table from `pyproject.toml` and the
    ``[markdown-preview]`` or ``[tool.markdown-preview]`` table from
    `.markdown-preview.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        RendererConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "markdown-preview")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".markdown-preview.toml",
            table_paths=[("markdown-preview",), ("tool", "markdown-preview")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return RendererConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> RendererConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> RendererConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return RendererConfig()

    # TOML keys are conventionally dashed; dataclass fields are not.
    fields = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return RendererConfig(**fields)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: RendererConfig) -> RendererConfig:
    theme = config.theme.strip().lower() if isinstance(config.theme, str) else config.theme
    fold_keys = (
        config.fold_keys.strip().lower() if isinstance(config.fold_keys, str) else config.fold_keys
    )
    return replace(config, theme=theme, fold_keys=fold_keys)


def validate_config(config: RendererConfig) -> None:
    """Validate a `RendererConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If the theme or fold key strategy is unknown, a flag is
            not a boolean, or the input limit is not a positive integer.

    Examples:
        validate_config(RendererConfig(theme="dark"))
    """
    config = normalize_config(config)

    if config.theme not in THEME_NAMES:
        raise ConfigError(f"`theme` must be one of: {', '.join(THEME_NAMES)}")
    if config.fold_keys not in FOLD_KEY_STRATEGIES:
        raise ConfigError(f"`fold_keys` must be one of: {', '.join(FOLD_KEY_STRATEGIES)}")

    for key in ("enable_syntax_highlight", "enable_code_folding", "heading_anchors"):
        if not isinstance(getattr(config, key), bool):
            raise ConfigError(f"`{key}` must be a boolean")

    value = config.max_input_chars
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError("`max_input_chars` must be an integer")
    if value <= 0:
        raise ConfigError("`max_input_chars` must be a positive integer")


def get_max_input_chars(default: int) -> int:
    """Resolve the input size cap, honoring the environment override.

    Args:
        default: Fallback value when the environment variable is unset.

    Returns:
        int: Maximum number of characters rendered.

    Raises:
        ConfigError: If the environment value is not a positive integer.

    Examples:
        os.environ["MARKDOWN_PREVIEW_MAX_INPUT_CHARS"] = "5000"
        limit = get_max_input_chars(default=1_000_000)
    """
    env_value = os.environ.get(MAX_INPUT_CHARS_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_chars = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_INPUT_CHARS_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ConfigError(error_message) from error

    if max_chars <= 0:
        raise ConfigError(f"{MAX_INPUT_CHARS_ENV_VAR} must be a positive integer, got {max_chars}.")

    return max_chars


def apply_overrides(config: RendererConfig, **overrides: object) -> RendererConfig:
    """Apply override values to a `RendererConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        RendererConfig: New configuration with the provided overrides applied.
        The original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `RendererConfig`.

    Examples:
        updated = apply_overrides(config, theme="dark", max_input_chars=5000)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RendererConfig:
    """Load, override, and validate configuration.

    The environment cap is applied after file values and before explicit
    overrides. It is not read at all when `max_input_chars` is overridden.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        RendererConfig: Validated configuration ready for rendering.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), theme="minimal")
    """
    config = load_config(search_path)
    if overrides.get("max_input_chars") is None:
        config = replace(config, max_input_chars=get_max_input_chars(config.max_input_chars))
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config
