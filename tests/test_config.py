"""Tests for configuration loading from the preprocessor context."""

from mdbook_inline_highlighting.config import InlineHighlightingConfig, load_config


class TestInlineHighlightingConfig:
    def test_defaults(self):
        c = InlineHighlightingConfig()
        assert c.default_language is None
        assert c.smart_punctuation is False

    def test_custom_settings(self):
        c = InlineHighlightingConfig()
        c.set("my_key", "my_value")
        assert c.get("my_key") == "my_value"
        assert c.get("missing", "default") == "default"


class TestLoadConfig:
    def test_empty_context(self):
        config, error = load_config({})
        assert error is None
        assert config.default_language is None
        assert config.smart_punctuation is False

    def test_empty_tables(self, context):
        config, error = load_config(context)
        assert error is None
        assert config.default_language is None

    def test_default_language(self, context):
        context["config"]["preprocessor"]["inline-highlighting"]["default-language"] = "rust"
        config, error = load_config(context)
        assert error is None
        assert config.default_language == "rust"

    def test_smart_punctuation(self, context):
        context["config"]["output"]["html"]["smart-punctuation"] = True
        config, error = load_config(context)
        assert error is None
        assert config.smart_punctuation is True

    def test_wrong_language_type_is_ignored(self, context):
        context["config"]["preprocessor"]["inline-highlighting"]["default-language"] = 42
        config, error = load_config(context)
        assert config.default_language is None
        assert error is not None
        assert "default-language must be a string" in error

    def test_wrong_smart_punctuation_type_is_ignored(self, context):
        context["config"]["output"]["html"]["smart-punctuation"] = "yes"
        config, error = load_config(context)
        assert config.smart_punctuation is False
        assert "smart-punctuation must be a boolean" in error

    def test_other_preprocessor_keys_kept(self, context):
        table = context["config"]["preprocessor"]["inline-highlighting"]
        table["command"] = "mdbook-inline-highlighting"
        table["default-language"] = "py"
        config, _ = load_config(context)
        assert config.get("command") == "mdbook-inline-highlighting"
        assert config.get("default-language") is None

    def test_missing_output_table(self, context):
        del context["config"]["output"]
        config, error = load_config(context)
        assert error is None
        assert config.smart_punctuation is False
