"""Unit tests for survey link generation."""

from urllib.parse import parse_qs, urlparse

import pytest

from rentals.models import SurveyLanguage
from rentals.services.survey_links import SurveyLinkGenerator


@pytest.fixture
def generator() -> SurveyLinkGenerator:
    return SurveyLinkGenerator("https://rentals.example.com/")


class TestGenerateToken:
    def test_tokens_are_unique_and_url_safe(self, generator: SurveyLinkGenerator) -> None:
        tokens = {generator.generate_token() for _ in range(50)}
        assert len(tokens) == 50
        for token in tokens:
            assert len(token) >= 20
            assert set(token) <= set(
                "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
            )


class TestBuildUrl:
    def test_multilingual_has_no_lang(self, generator: SurveyLinkGenerator) -> None:
        url = generator.build_url("BP-2025-ABCD1234", "tok123", SurveyLanguage.MULTILINGUAL)
        assert url == "https://rentals.example.com/survey/BP-2025-ABCD1234?token=tok123"

    @pytest.mark.parametrize(
        ("language", "code"),
        [(SurveyLanguage.BULGARIAN, "bg"), (SurveyLanguage.ENGLISH, "en")],
    )
    def test_language_code(
        self, generator: SurveyLinkGenerator, language: SurveyLanguage, code: str
    ) -> None:
        url = generator.build_url("BP-1", "tok", language)
        query = parse_qs(urlparse(url).query)
        assert query == {"token": ["tok"], "lang": [code]}

    def test_base_url_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SURVEY_BASE_URL", "https://survey.example.org")
        url = SurveyLinkGenerator().build_url("BP-1", "tok")
        assert url.startswith("https://survey.example.org/survey/BP-1?")
