"""Configuration loading and management."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionConfig:
    """Configuration for recognizing region markers.

    Attributes:
        start_keywords: Keywords that open a region, tried in order.
        end_keywords: Keywords that close a region, tried in order.
        case_sensitive: Whether keyword matching respects case. When False the
            keyword lists are lowercased once by `normalize_config`.
        fold_sentinel: Single character that marks a region as folded by
            default, either right after the start keyword or at line end.
        fold_by_default: Whether every region starts out folded.
        comment_prefixes: Line-comment tokens stripped before keyword
            matching, tried in order; the first match wins.
        block_comment_openers: Tokens that open multi-line block comments.
        block_comment_closers: Tokens that close block comments, paired with
            `block_comment_openers` by position.
        enable_folding: Whether fold queries return real directives.
        disabled_extensions: File suffixes that are never scanned.
        indent_chars: Indentation per nesting level in the outline.
        max_file_size: Maximum file size in bytes that will be processed.
        max_line_length: Maximum line length allowed while reading.
        max_markers: Maximum number of markers accepted per document.

    Examples:
        RegionConfig(start_keywords=("region", "BEGIN"), case_sensitive=True)
    """

    # Markers
    start_keywords: tuple[str, ...] = ("#region", "region")
    end_keywords: tuple[str, ...] = ("#endregion", "endregion")
    case_sensitive: bool = False
    fold_sentinel: str = "-"
    fold_by_default: bool = False

    # Comment syntax
    comment_prefixes: tuple[str, ...] = ("--", "//", "#", ";", "/*", "*", "%%")
    block_comment_openers: tuple[str, ...] = ("/*",)
    block_comment_closers: tuple[str, ...] = ("*/",)

    # Presentation
    enable_folding: bool = True
    disabled_extensions: tuple[str, ...] = (".log", ".txt", ".md", ".markdown")
    indent_chars: str = "  "

    # Limits
    max_file_size: int = 10 * 1024 * 1024
    max_line_length: int = 10_000
    max_markers: int = 10_000


_SEQUENCE_FIELDS = (
    "start_keywords",
    "end_keywords",
    "comment_prefixes",
    "block_comment_openers",
    "block_comment_closers",
    "disabled_extensions",
)


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`fold_sentinel` must be a single character")
    """


def load_config(search_path: Path) -> RegionConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.code-regions]`` table from `pyproject.toml` and the
    ``[code-regions]`` or ``[tool.code-regions]`` table from
    `.code-regions.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        RegionConfig: Loaded configuration with defaults applied when necessary.
            Keywords keep the case they were written in; `build_config` folds
            them once the effective `case_sensitive` is known.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("src"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "code-regions")]
        )
        if pyproject_config is not None:
            return _coerce_sequences(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".code-regions.toml",
            table_paths=[("code-regions",), ("tool", "code-regions")],
        )
        if dotfile_config is not None:
            return _coerce_sequences(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    logger.debug("No code-regions configuration found above %s; using defaults", search_path)
    return RegionConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> RegionConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping unreadable config %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        logger.debug("Using [%s] from %s", ".".join(table_path), config_file)
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
) -> RegionConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return RegionConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return RegionConfig()

    try:
        return RegionConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def _coerce_sequences(config: RegionConfig) -> RegionConfig:
    changes: dict[str, object] = {}
    for name in _SEQUENCE_FIELDS:
        value = getattr(config, name)
        if isinstance(value, str):
            value = (value,)
        if isinstance(value, list):
            value = tuple(value)
        changes[name] = value
    return replace(config, **changes)


def normalize_config(config: RegionConfig) -> RegionConfig:
    """Coerce sequence fields to tuples and fold keyword case.

    When matching is case-insensitive the keyword lists are lowercased here,
    once, so the parser only lowercases the text it inspects. Call it on the
    effective configuration, after overrides, so the case mode it folds for
    is the one in use.
    """
    config = _coerce_sequences(config)
    if config.case_sensitive is not False:
        return config

    changes: dict[str, object] = {}
    for name in ("start_keywords", "end_keywords"):
        value = getattr(config, name)
        if isinstance(value, tuple) and all(isinstance(item, str) for item in value):
            changes[name] = tuple(item.lower() for item in value)
    return replace(config, **changes)


def validate_config(config: RegionConfig) -> None:
    """Validate a `RegionConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If keyword lists are empty or overlap, the fold sentinel is
            not a single visible character, comment tokens are malformed, flags
            are not booleans, or numeric limits are non-positive.

    Examples:
        validate_config(RegionConfig(start_keywords=("BEGIN",), end_keywords=("END",)))
    """
    config = normalize_config(config)

    _ensure_booleans(
        {
            "case_sensitive": config.case_sensitive,
            "fold_by_default": config.fold_by_default,
            "enable_folding": config.enable_folding,
        }
    )

    for name in _SEQUENCE_FIELDS:
        _ensure_strings(name, getattr(config, name))

    for name in ("start_keywords", "end_keywords"):
        keywords = getattr(config, name)
        if not keywords:
            raise ConfigError(f"`{name}` must not be empty")
        for keyword in keywords:
            if not keyword or any(character.isspace() for character in keyword):
                raise ConfigError(f"`{name}` entries must be non-empty words without whitespace")

    shared = set(config.start_keywords) & set(config.end_keywords)
    if shared:
        raise ConfigError(
            f"`start_keywords` and `end_keywords` share keywords: {', '.join(sorted(shared))}"
        )

    if not isinstance(config.fold_sentinel, str) or len(config.fold_sentinel) != 1:
        raise ConfigError("`fold_sentinel` must be a single character")
    if config.fold_sentinel.isspace():
        raise ConfigError("`fold_sentinel` must not be whitespace")

    if any(not prefix.strip() for prefix in config.comment_prefixes):
        raise ConfigError("`comment_prefixes` entries must not be blank")
    if len(config.block_comment_openers) != len(config.block_comment_closers):
        raise ConfigError(
            "`block_comment_openers` and `block_comment_closers` must have the same length"
        )
    if any(not token.strip() for token in config.block_comment_openers):
        raise ConfigError("`block_comment_openers` entries must not be blank")
    if any(not token.strip() for token in config.block_comment_closers):
        raise ConfigError("`block_comment_closers` entries must not be blank")

    if not isinstance(config.indent_chars, str) or not config.indent_chars:
        raise ConfigError("`indent_chars` must not be empty")

    limits = {
        "max_file_size": config.max_file_size,
        "max_line_length": config.max_line_length,
        "max_markers": config.max_markers,
    }
    _ensure_integers(limits)
    _ensure_positive(limits)


def apply_overrides(config: RegionConfig, **overrides: object) -> RegionConfig:
    """Apply override values to a `RegionConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None (and empty keyword tuples coming from unused repeatable CLI
            options) are ignored.

    Returns:
        RegionConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `RegionConfig`.

    Examples:
        updated = apply_overrides(config, case_sensitive=True, fold_sentinel="!")
    """
    changes = {
        key: value for key, value in overrides.items() if value is not None and value != ()
    }
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RegionConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        RegionConfig: Validated, normalized configuration ready for parsing.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), case_sensitive=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")


def _ensure_booleans(values: dict[str, object]) -> None:
    for key, value in values.items():
        if not isinstance(value, bool):
            raise ConfigError(f"`{key}` must be a boolean")


def _ensure_strings(key: str, values: object) -> None:
    if not isinstance(values, tuple) or not all(isinstance(item, str) for item in values):
        raise ConfigError(f"`{key}` must be a list of strings")
