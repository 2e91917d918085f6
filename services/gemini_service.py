import os
import json
import logging
from enum import Enum

from google import genai
from google.genai import errors, types

from config import Config
from services.errors import ErrorKind, PredictionError
from services.prediction_schema import PREDICTION_SCHEMA

logger = logging.getLogger("tipster")

PROMPT_PATH = os.path.join(os.path.dirname(__file__), 'prompts', 'prediction_prompt.txt')


def _reason_name(reason):
    # finish/block reasons arrive as SDK enums, or plain strings from raw payloads
    if isinstance(reason, Enum):
        return reason.value
    return str(reason)


def _strip_code_fences(text):
    clean_text = text.strip()
    if clean_text.startswith("```json"):
        clean_text = clean_text[7:]
    if clean_text.startswith("```"):
        clean_text = clean_text[3:]
    if clean_text.endswith("```"):
        clean_text = clean_text[:-3]
    return clean_text.strip()


def classify_api_error(exc):
    """Tag a google-genai APIError with the matching ErrorKind."""
    message = (exc.message or str(exc)).lower()
    status = (exc.status or "").upper()
    if "api key not valid" in message or exc.code in (401, 403):
        return ErrorKind.AUTH_FAILURE
    if "quota" in message or exc.code == 429 or status == "RESOURCE_EXHAUSTED":
        return ErrorKind.QUOTA_EXCEEDED
    return ErrorKind.UNKNOWN


class GeminiService:
    def __init__(self, api_key=None, model=None, client=None):
        config = Config()
        self.api_key = api_key or config.gemini_api_key
        self.model = model or config.gemini_model
        self.prompt_template = self._load_prompt()

        if client is not None:
            self.client = client
            return

        if not self.api_key:
            logger.warning("GEMINI_API_KEY not set in environment variables.")
            self.client = None
            return

        masked_key = f"{self.api_key[:5]}...{self.api_key[-5:]}" if len(self.api_key) > 10 else "***"
        logger.debug(f"Gemini client initialized with key: {masked_key}")
        self.client = genai.Client(api_key=self.api_key)

    def _load_prompt(self):
        with open(PROMPT_PATH, 'r') as f:
            return f.read()

    def build_prompt(self, team_a, team_b, match_category):
        return self.prompt_template.format(
            team_a=team_a,
            team_b=team_b,
            match_category=match_category,
        ).strip()

    def get_prediction(self, team_a, team_b, match_category):
        """
        Ask Gemini for a structured prediction and return the parsed JSON.

        Raises PredictionError tagged with the failure kind when the prompt or
        completion is blocked, the completion is empty or cut off, the text is
        not valid JSON, or the API rejects the call.
        """
        if not self.client:
            raise PredictionError(ErrorKind.AUTH_FAILURE, "Gemini API not configured or key missing.")

        prompt = self.build_prompt(team_a, team_b, match_category)

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=PREDICTION_SCHEMA,
                ),
            )
        except errors.APIError as e:
            kind = classify_api_error(e)
            logger.error(f"Gemini API error ({kind.value}): {e}")
            raise PredictionError(kind, str(e)) from e

        text = self._extract_text(response)
        return self._parse_json(text)

    def _extract_text(self, response):
        prompt_feedback = getattr(response, "prompt_feedback", None)
        block_reason = getattr(prompt_feedback, "block_reason", None)
        if block_reason:
            reason = _reason_name(block_reason)
            logger.warning(f"Gemini prompt was blocked for safety reasons: {reason}")
            raise PredictionError(
                ErrorKind.BLOCKED_PROMPT,
                f"The request was blocked by the AI's safety filter ({reason}). Please try different team names.",
            )

        candidate = response.candidates[0] if response.candidates else None
        parts = candidate.content.parts if candidate and candidate.content and candidate.content.parts else []
        text = parts[0].text if parts else None

        if not text:
            finish_reason = _reason_name(candidate.finish_reason) if candidate and candidate.finish_reason else "NO_CANDIDATE"
            logger.warning(f"Gemini returned an invalid or empty response. Finish reason: {finish_reason}")

            if finish_reason == "SAFETY":
                raise PredictionError(
                    ErrorKind.BLOCKED_COMPLETION,
                    "The AI's response was blocked by its safety filter. Please try a different match-up.",
                )
            if finish_reason == "MAX_TOKENS":
                raise PredictionError(
                    ErrorKind.TRUNCATED,
                    "The AI's response was too long and was cut off before it could be completed.",
                )
            raise PredictionError(
                ErrorKind.EMPTY_RESPONSE,
                "The AI did not return a valid prediction. This can happen with very obscure teams or due to network issues.",
            )

        finish_reason = _reason_name(candidate.finish_reason) if candidate.finish_reason else None
        if finish_reason != "STOP":
            logger.warning(f"Gemini generation finished unexpectedly. Reason: {finish_reason}")

        return text

    def _parse_json(self, text):
        try:
            return json.loads(_strip_code_fences(text))
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON from Gemini: {text}")
            raise PredictionError(
                ErrorKind.PARSE_FAILURE,
                "The AI returned an invalid JSON response. Please try again.",
            ) from e
