"""Guest survey link generation.

Each booked period gets a private survey link once. The token keeps the
survey page from being guessable from the period ID alone.
"""

import os
import secrets
from urllib.parse import urlencode

from rentals.models import SurveyLanguage

DEFAULT_SURVEY_BASE_URL = "http://localhost:3000"

# Survey language -> lang query parameter (multilingual lets the guest choose)
LANGUAGE_CODES: dict[SurveyLanguage, str | None] = {
    SurveyLanguage.MULTILINGUAL: None,
    SurveyLanguage.BULGARIAN: "bg",
    SurveyLanguage.ENGLISH: "en",
}


class SurveyLinkGenerator:
    """Builds survey tokens and URLs."""

    TOKEN_BYTES = 18

    def __init__(self, base_url: str | None = None) -> None:
        """Initialize the generator.

        Args:
            base_url: Public site origin. Defaults to SURVEY_BASE_URL env var.
        """
        self.base_url = (
            base_url or os.getenv("SURVEY_BASE_URL", DEFAULT_SURVEY_BASE_URL)
        ).rstrip("/")

    def generate_token(self) -> str:
        """Generate a fresh URL-safe survey token."""
        return secrets.token_urlsafe(self.TOKEN_BYTES)

    def build_url(
        self,
        period_id: str,
        token: str,
        language: SurveyLanguage | None = None,
    ) -> str:
        """Build the survey URL for a booking period.

        Args:
            period_id: Booking period ID
            token: Survey token
            language: Survey language; multilingual adds no lang parameter

        Returns:
            Absolute survey URL
        """
        params = {"token": token}
        lang = LANGUAGE_CODES.get(language) if language else None
        if lang:
            params["lang"] = lang
        return f"{self.base_url}/survey/{period_id}?{urlencode(params)}"
