"""
AI nutrition estimates for foods missing from the catalog

Supports the Google Gemini REST API and OpenRouter.
"""
import json
import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
import yaml

from fittrack.config import settings

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
RETRY_DELAY = 2  # seconds

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
OPENROUTER_API_URL = "https://openrouter.ai/api/v1/chat/completions"

PROJECT_ROOT = Path(__file__).parent.parent.parent
PROMPT_PATH = PROJECT_ROOT / "config" / "prompts" / "food_estimate.yaml"

REQUIRED_KEYS = ("calories", "protein", "carbs", "fats")
CONFIDENCE_LEVELS = ("high", "medium", "low")


class EstimatorUnavailable(Exception):
    """No API key configured for the selected provider"""


@dataclass
class NutritionEstimate:
    name: str
    description: str
    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: Optional[float] = None
    sugar: Optional[float] = None
    serving_size: float = 100
    serving_unit: str = "g"
    confidence: str = "medium"


class FoodEstimatorService:
    """Estimate per-100 g nutrition for a food name"""

    def __init__(self, provider: Optional[str] = None, api_key: Optional[str] = None, model: Optional[str] = None):
        self.provider = (provider or settings.FOOD_ESTIMATE_PROVIDER).lower()
        if api_key is not None:
            self.api_key = api_key
        elif self.provider == "openrouter":
            self.api_key = settings.OPENROUTER_API_KEY
        else:
            self.api_key = settings.GOOGLE_API_KEY
        self.model_name = model or settings.FOOD_ESTIMATE_MODEL
        self.config = self._load_prompt_config()

        logger.info(f"Food estimator initialized: provider={self.provider}, model={self.model_name}")

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    def _load_prompt_config(self) -> Dict[str, Any]:
        if not PROMPT_PATH.exists():
            logger.warning(f"Prompt config not found at {PROMPT_PATH}, using default prompt")
            return {
                "system_prompt": "You are a nutrition expert.",
                "user_prompt_template": 'Estimate the nutritional values for "{food_name}" per 100 g.',
                "json_instruction": "Respond only with JSON containing calories, protein, carbs and fats.",
            }

        with open(PROMPT_PATH, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)

    def build_prompt(self, food_name: str) -> str:
        system_prompt = self.config.get("system_prompt", "")
        user_prompt = self.config.get("user_prompt_template", "").format(food_name=food_name)
        json_instruction = self.config.get("json_instruction", "").format()
        return f"{system_prompt}\n\n{user_prompt}\n\n{json_instruction}"

    async def _call_google_api(self, prompt: str) -> str:
        url = GEMINI_API_URL.format(model=self.model_name)
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"maxOutputTokens": 1024, "responseMimeType": "application/json"},
        }

        logger.info(f"Calling Google Gemini REST API: {self.model_name}")
        async with httpx.AsyncClient(timeout=60.0) as client:
            response = await client.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json", "x-goog-api-key": self.api_key},
            )
            if response.status_code != 200:
                logger.error(f"Gemini API error: {response.status_code} - {response.text[:500]}")
                raise ValueError(f"Gemini API error: {response.status_code}")
            result_data = response.json()

        candidates = result_data.get("candidates") or []
        if not candidates:
            raise ValueError("API returned no candidates")
        parts = candidates[0].get("content", {}).get("parts", [])
        if not parts:
            raise ValueError("API returned empty parts")
        return parts[0].get("text", "")

    async def _call_openrouter_api(self, prompt: str) -> str:
        payload = {
            "model": self.model_name,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": 1024,
        }

        logger.info(f"Calling OpenRouter API: {self.model_name}")
        async with httpx.AsyncClient(timeout=60.0) as client:
            response = await client.post(
                OPENROUTER_API_URL,
                json=payload,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.api_key}",
                    "X-Title": settings.APP_NAME,
                },
            )
            if response.status_code != 200:
                logger.error(f"OpenRouter API error: {response.status_code} - {response.text[:500]}")
                raise ValueError(f"OpenRouter API error: {response.status_code}")
            result_data = response.json()

        choices = result_data.get("choices") or []
        if not choices:
            raise ValueError("API returned no choices")
        return choices[0].get("message", {}).get("content", "")

    def _extract_json(self, text: str) -> str:
        """
        Pull the first JSON object out of a model response.

        Handles ```json fences and trailing prose.
        """
        text = text.strip()
        if text.startswith("```json"):
            text = text[7:]
        elif text.startswith("```"):
            text = text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()

        start = text.find("{")
        if start == -1:
            return text

        depth = 0
        for i, char in enumerate(text[start:], start):
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start:i + 1]
        return text[start:]

    def parse_estimate(self, food_name: str, text: str) -> NutritionEstimate:
        """
        Validate a model response.

        Raises:
            ValueError: not JSON, or a required nutrient is missing or not positive
        """
        try:
            data = json.loads(self._extract_json(text))
        except json.JSONDecodeError as e:
            raise ValueError(f"Estimate is not valid JSON: {e}")

        for key in REQUIRED_KEYS:
            value = data.get(key)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"Estimate missing nutrient: {key}")

        confidence = data.get("confidence")
        if confidence not in CONFIDENCE_LEVELS:
            confidence = "medium"

        def optional_number(key: str) -> Optional[float]:
            value = data.get(key)
            return float(value) if isinstance(value, (int, float)) and value else None

        return NutritionEstimate(
            name=data.get("name") or food_name,
            description=data.get("description") or "AI-estimated nutritional values",
            calories=float(data["calories"]),
            protein=float(data["protein"]),
            carbs=float(data["carbs"]),
            fats=float(data["fats"]),
            fiber=optional_number("fiber"),
            sugar=optional_number("sugar"),
            confidence=confidence,
        )

    async def estimate(self, food_name: str) -> NutritionEstimate:
        """
        Estimate nutrition for one food.

        Raises:
            EstimatorUnavailable: no API key configured
            ValueError: API failure or unusable response
        """
        if not self.available:
            raise EstimatorUnavailable(f"No API key configured for provider '{self.provider}'")

        prompt = self.build_prompt(food_name)
        try:
            if self.provider == "openrouter":
                text = await self._call_openrouter_api(prompt)
            else:
                text = await self._call_google_api(prompt)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling estimate API: {e}", exc_info=True)
            raise ValueError(f"Estimate API HTTP error: {e}")

        if not text:
            raise ValueError("API returned empty content")
        return self.parse_estimate(food_name, text)

    async def estimate_with_retry(self, food_name: str, max_retries: int = MAX_RETRIES) -> NutritionEstimate:
        """Retry ``estimate`` on API and parse failures"""
        last_error: Optional[Exception] = None
        for attempt in range(max_retries):
            try:
                return await self.estimate(food_name)
            except EstimatorUnavailable:
                raise
            except ValueError as e:
                last_error = e
                logger.warning(f"Food estimate failed (attempt {attempt + 1}/{max_retries}): {e}")
                if attempt < max_retries - 1:
                    await asyncio.sleep(RETRY_DELAY)

        raise ValueError(f"Food estimate failed after {max_retries} attempts: {last_error}")


_food_estimator_instance = None


def get_food_estimator() -> FoodEstimatorService:
    """Food estimator singleton"""
    global _food_estimator_instance
    if _food_estimator_instance is None:
        _food_estimator_instance = FoodEstimatorService()
    return _food_estimator_instance
