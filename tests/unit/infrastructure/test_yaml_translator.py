"""Tests for the YAML message catalog."""

from pathlib import Path

import pytest

from ficarchive.domain.shared.error import ConfigurationError
from ficarchive.infrastructure.i18n.yaml_translator import YamlTranslator, interpolate


class TestPackagedCatalog:
    def test_nested_key(self):
        translator = YamlTranslator()

        assert translator.translate("application.not_allowed") == (
            "Sorry, you're not allowed to do that."
        )

    def test_interpolates_params(self):
        message = YamlTranslator().translate(
            "users.status.ban_notice_html", contact_abuse_link="<a>contact us</a>"
        )

        assert message.endswith("please <a>contact us</a>.")

    def test_missing_key_without_default(self):
        assert YamlTranslator().translate("nope.missing") == "translation missing: en.nope.missing"

    def test_missing_key_uses_default(self):
        message = YamlTranslator().translate("nope.missing", default="Hi %{name}", name="Ann")

        assert message == "Hi Ann"

    def test_branch_key_is_missing(self):
        assert YamlTranslator().translate("application.access_denied").startswith(
            "translation missing"
        )


class TestCustomCatalog:
    def test_other_locale_dir(self, tmp_path: Path):
        (tmp_path / "fr.yml").write_text('fr:\n  greeting: "Bonjour %{name}"\n', encoding="utf-8")

        translator = YamlTranslator(locale="fr", locales_dir=tmp_path)

        assert translator.translate("greeting", name="Ann") == "Bonjour Ann"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigurationError, match="not found"):
            YamlTranslator(locale="de", locales_dir=tmp_path)

    def test_wrong_root_key(self, tmp_path: Path):
        (tmp_path / "de.yml").write_text("en:\n  greeting: Hi\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="root key"):
            YamlTranslator(locale="de", locales_dir=tmp_path)


class TestInterpolate:
    def test_unknown_placeholder_left_alone(self):
        assert interpolate("%{a} and %{b}", {"a": 1}) == "1 and %{b}"
