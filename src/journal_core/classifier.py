"""
Mood Classifier Client.

Sends journal text to the Gemini generateContent endpoint and turns the
model's JSON answer into a validated MoodAnalysis. Every failure surfaces as
ClassificationError before anything is written to the store.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from .errors import ClassificationError, ValidationError
from .models import MoodAnalysis, MoodType

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1/models/gemini-2.0-flash:generateContent"
)
DEFAULT_TIMEOUT = 30.0
MAX_KEYWORDS = 5

ANALYSIS_PROMPT = """Analyze the journal text below and answer ONLY with JSON in this format:

{{
  "mood": "happy",
  "energy": 0.8,
  "sentiment": 0.9,
  "keywords": ["happy", "positive", "energetic"],
  "summary": "The writer feels happy and energetic today."
}}

mood values: {moods}
energy: between 0.0 and 1.0
sentiment: between -1.0 and 1.0
keywords: at most {max_keywords} keywords
summary: a one or two sentence summary

Return ONLY the JSON, nothing else.

Text to analyze:
{text}"""


def build_prompt(text: str) -> str:
    return ANALYSIS_PROMPT.format(
        moods=", ".join(m.value for m in MoodType),
        max_keywords=MAX_KEYWORDS,
        text=text,
    )


def _strip_code_fences(raw: str) -> str:
    return raw.replace("```json", "").replace("```", "").strip()


def parse_analysis(raw: str) -> MoodAnalysis:
    """
    Parse the model's text answer into a MoodAnalysis.

    Raises:
        ClassificationError: if the text is not the expected JSON object or
            its values are out of range
    """
    try:
        payload = json.loads(_strip_code_fences(raw))
    except json.JSONDecodeError as e:
        raise ClassificationError(f"Classifier returned undecodable JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ClassificationError("Classifier returned JSON that is not an object")

    missing = [k for k in ("mood", "energy", "sentiment") if k not in payload]
    if missing:
        raise ClassificationError(f"Classifier response missing fields: {missing}")

    keywords = payload.get("keywords") or []
    if not isinstance(keywords, list):
        raise ClassificationError("Classifier keywords must be a list")

    try:
        return MoodAnalysis(
            mood=MoodType.from_tag(str(payload["mood"])),
            energy=payload["energy"],
            sentiment=payload["sentiment"],
            keywords=tuple(str(k) for k in keywords),
            summary=str(payload.get("summary") or ""),
        )
    except ValidationError as e:
        raise ClassificationError(f"Classifier returned invalid analysis: {e}") from e


def _extract_text(body: Dict[str, Any]) -> str:
    try:
        text = body["candidates"][0]["content"]["parts"][0].get("text")
    except (KeyError, IndexError, TypeError, AttributeError):
        text = None
    if not text:
        raise ClassificationError("Classifier response contained no content")
    return text


class MoodClassifier:
    """
    Async client for the external mood classifier.

    Args:
        api_key: Gemini API key
        endpoint: generateContent URL
        timeout: Request timeout in seconds
        transport: Optional httpx transport (used by tests)
    """

    def __init__(
        self,
        api_key: Optional[str],
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport

    async def analyze(self, text: str) -> MoodAnalysis:
        """
        Classify one journal text.

        Raises:
            ClassificationError: on configuration, transport, HTTP or payload errors
        """
        if not self.api_key:
            raise ClassificationError("Classifier API key is not configured")
        if not self.endpoint or not self.endpoint.startswith(("http://", "https://")):
            raise ClassificationError(f"Invalid classifier endpoint: {self.endpoint!r}")

        request_body = {"contents": [{"parts": [{"text": build_prompt(text)}]}]}

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout), transport=self._transport
            ) as client:
                response = await client.post(
                    self.endpoint,
                    params={"key": self.api_key},
                    json=request_body,
                )
        except httpx.HTTPError as e:
            logger.error(f"[CLASSIFIER] Request failed: {e}")
            raise ClassificationError(f"Classifier request failed: {e}") from e

        if response.status_code != 200:
            logger.error(
                f"[CLASSIFIER] Status {response.status_code}: {response.text[:200]}"
            )
            raise ClassificationError(
                f"Classifier returned status {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ClassificationError(f"Classifier response is not JSON: {e}") from e

        analysis = parse_analysis(_extract_text(body))
        logger.info(
            f"[CLASSIFIER] mood={analysis.mood.value} energy={analysis.energy:.2f} "
            f"sentiment={analysis.sentiment:.2f}"
        )
        return analysis
