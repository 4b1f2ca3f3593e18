"""Configuration management for the inline highlighting preprocessor.

Settings come from the ``book.toml`` of the book being built, which mdBook
hands over as the ``config`` table of the preprocessor context:

    [preprocessor.inline-highlighting]
    default-language = "rust"

    [output.html]
    smart-punctuation = true
"""

from __future__ import annotations

from typing import Any, Optional

PREPROCESSOR_NAME = "inline-highlighting"

DEFAULT_LANGUAGE_KEY = ("preprocessor", PREPROCESSOR_NAME, "default-language")
SMART_PUNCTUATION_KEY = ("output", "html", "smart-punctuation")


class InlineHighlightingConfig:
    """Configuration container for inline highlighting settings.

    All settings have defaults that leave inline code untouched unless a
    span carries an explicit language tag.
    """

    def __init__(self):
        # Language applied to untagged spans; None leaves them as plain code
        self.default_language: Optional[str] = None

        # Mirrors output.html.smart-punctuation so the round trip keeps the
        # same typography the HTML renderer would produce
        self.smart_punctuation: bool = False

        # Any other keys of the preprocessor table
        self._custom: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        """Set a custom configuration value."""
        self._custom[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a custom configuration value."""
        return self._custom.get(key, default)


def _lookup(table: dict, path: tuple[str, ...]) -> Any:
    """Follow a dotted key path through nested tables, None if any part is missing."""
    value: Any = table
    for part in path:
        if not isinstance(value, dict) or part not in value:
            return None
        value = value[part]
    return value


def load_config(context: dict) -> tuple[InlineHighlightingConfig, Optional[str]]:
    """Load configuration from an mdBook preprocessor context.

    Values of the wrong type are skipped and keep their default.

    Returns:
        A tuple of (config, error_message). error_message describes every
        skipped value, or is None when all values were usable.
    """
    config = InlineHighlightingConfig()
    errors: list[str] = []
    book_config = context.get("config") or {}

    language = _lookup(book_config, DEFAULT_LANGUAGE_KEY)
    if isinstance(language, str):
        config.default_language = language
    elif language is not None:
        errors.append(
            f"{'.'.join(DEFAULT_LANGUAGE_KEY)} must be a string, got {type(language).__name__}"
        )

    smart = _lookup(book_config, SMART_PUNCTUATION_KEY)
    if isinstance(smart, bool):
        config.smart_punctuation = smart
    elif smart is not None:
        errors.append(
            f"{'.'.join(SMART_PUNCTUATION_KEY)} must be a boolean, got {type(smart).__name__}"
        )

    table = _lookup(book_config, DEFAULT_LANGUAGE_KEY[:2])
    if isinstance(table, dict):
        for key, value in table.items():
            if key != DEFAULT_LANGUAGE_KEY[-1]:
                config.set(key, value)

    if errors:
        return config, "Invalid configuration:\n" + "\n".join(errors)
    return config, None
