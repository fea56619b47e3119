import logging
from typing import Optional

import requests

from showdesk.core.config import settings

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    status_code = 500
    message = "AI gateway fout"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class RateLimited(GatewayError):
    status_code = 429
    message = "Rate limit bereikt, probeer het later opnieuw."


class QuotaExhausted(GatewayError):
    status_code = 402
    message = "Geen credits meer beschikbaar."


class AIGatewayClient:
    """Chat-completions client for the LLM gateway."""

    def __init__(
        self,
        url: str,
        api_key: str,
        theater_name: str,
        timeout: int = 60,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.theater_name = theater_name
        self.timeout = timeout
        self.session = session or requests.Session()

    def _complete(self, model: str, messages: list) -> str:
        if not self.api_key:
            raise GatewayError("AI_GATEWAY_API_KEY is not configured")
        try:
            response = self.session.post(
                self.url,
                json={"model": model, "messages": messages},
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("AI gateway unreachable: %s", e)
            raise GatewayError() from e

        if response.status_code == 429:
            raise RateLimited()
        if response.status_code == 402:
            raise QuotaExhausted()
        if not response.ok:
            logger.error("AI gateway error: %s %s", response.status_code, response.text[:500])
            raise GatewayError()

        try:
            data = response.json()
            return data["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError):
            logger.error("Unexpected AI gateway response: %s", response.text[:500])
            return ""

    def optimize_text(
        self,
        text: str,
        title: str,
        keyword: Optional[str],
        model: str,
        max_words: int,
    ) -> str:
        system_prompt = (
            f"Je bent een marketingschrijver voor {self.theater_name}. Herschrijf "
            "voorstellingsteksten voor de website. Schrijf altijd in het Nederlands."
        )
        user_prompt = (
            f"Herschrijf deze voorstellingstekst voor de website van {self.theater_name}. "
            f"Maximaal {max_words} woorden. Wervend en uitnodigend. Verwerk het zoekwoord "
            f"'{keyword or title}' op een natuurlijke manier. Sluit af met een call-to-action. "
            "Behoud de kern van de inhoud.\n\n"
            f"Titel: {title}\n\n"
            f"Originele tekst:\n{text}"
        )
        return self._complete(model, [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ])

    def generate_alt_text(
        self,
        image_url: str,
        title: str,
        subtitle: Optional[str],
        model: str,
    ) -> str:
        show_name = " - ".join(part for part in (title, subtitle) if part)
        system_prompt = (
            f"Je bent een SEO-specialist voor {self.theater_name}. Genereer een beknopte, "
            "beschrijvende ALT-tekst in het Nederlands voor een afbeelding van een voorstelling. "
            "De ALT-tekst moet:\n"
            "- Maximaal 125 tekens zijn\n"
            "- De voorstelling beschrijven op basis van wat er op de afbeelding te zien is\n"
            "- De naam van de voorstelling bevatten\n"
            f"- \"{self.theater_name}\" bevatten\n"
            "- Geen aanhalingstekens gebruiken\n"
            "Geef ALLEEN de ALT-tekst terug, zonder verdere uitleg."
        )
        content = [
            {
                "type": "text",
                "text": (
                    f"Genereer een ALT-tekst voor de afbeelding van de voorstelling "
                    f"\"{show_name}\" in {self.theater_name}."
                ),
            },
            {"type": "image_url", "image_url": {"url": image_url}},
        ]
        return self._complete(model, [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": content},
        ]).strip()


def get_ai_client() -> AIGatewayClient:
    return AIGatewayClient(
        url=settings.AI_GATEWAY_URL,
        api_key=settings.AI_GATEWAY_API_KEY,
        theater_name=settings.THEATER_NAME,
        timeout=settings.AI_TIMEOUT_SECONDS,
    )
