import pytest

from blueprint.utils import i18n
from blueprint.utils.i18n import get_translated_message, setup_i18n


class TestTranslatedMessages:

    @pytest.mark.unit
    def test_english(self):
        assert get_translated_message("passwords_do_not_match", "en") == "Passwords do not match"

    @pytest.mark.unit
    def test_spanish(self):
        assert get_translated_message("passwords_do_not_match", "es") == "Las contraseñas no coinciden"

    @pytest.mark.unit
    def test_unsupported_locale_falls_back_to_default(self):
        assert get_translated_message("passwords_do_not_match", "fr") == "Passwords do not match"

    @pytest.mark.unit
    def test_unknown_key_returns_key(self):
        assert get_translated_message("no_such_key", "en") == "no_such_key"

    @pytest.mark.unit
    def test_placeholders_survive_translation(self):
        template = get_translated_message("rate_limit_exceeded", "en")
        assert template.format(minutes=5) == "Too many attempts. Please try again in 5 minutes."

    @pytest.mark.unit
    def test_catalogues_have_no_header_entry(self):
        assert "" not in i18n._fallback_catalogs["en"]

    @pytest.mark.unit
    def test_missing_locales_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            setup_i18n(str(tmp_path / "missing"))
