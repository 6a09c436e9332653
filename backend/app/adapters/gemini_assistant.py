"""
Google Gemini adapter for the health assistant.
"""
from typing import Optional

from app.config import settings

SYSTEM_INSTRUCTION = (
    "You are a helpful, empathetic medical assistant for the MediSwift app. "
    "You help users understand medicines, side effects, and general wellness. "
    "Disclaimer: Always advise users to consult a doctor for serious issues. "
    "Keep answers concise and mobile-friendly."
)


class AssistantUnavailable(Exception):
    pass


class GeminiAssistantAdapter:
    """Thin async wrapper over google.generativeai."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model_name = model_name or settings.GEMINI_MODEL
        self.temperature = (
            temperature if temperature is not None else settings.ASSISTANT_TEMPERATURE
        )
        self._model = None

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @property
    def model(self):
        """Lazy initialization of the Gemini model."""
        if self._model is None:
            if not self.configured:
                raise AssistantUnavailable("GEMINI_API_KEY is not set")
            import google.generativeai as genai

            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(
                self.model_name, system_instruction=SYSTEM_INSTRUCTION
            )
        return self._model

    async def generate(self, prompt: str) -> str:
        response = await self.model.generate_content_async(
            prompt,
            generation_config={"temperature": self.temperature},
        )
        return response.text

    def health_check(self) -> bool:
        return self.configured
