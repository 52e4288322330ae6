"""
Tests for the Mood Classifier client.

Uses httpx.MockTransport so no request leaves the process.

Usage:
    pytest tests/test_classifier.py -v
"""
import json
import pytest
import httpx

from journal_core.classifier import (
    DEFAULT_ENDPOINT,
    MAX_KEYWORDS,
    MoodClassifier,
    build_prompt,
    parse_analysis,
)
from journal_core.errors import ClassificationError, ValidationError
from journal_core.models import MoodType


def gemini_body(text: str) -> dict:
    """Minimal generateContent response wrapping ``text``."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def analysis_json(**overrides) -> str:
    payload = {
        "mood": "happy",
        "energy": 0.8,
        "sentiment": 0.6,
        "keywords": ["sun", "friends"],
        "summary": "A bright day.",
    }
    payload.update(overrides)
    return json.dumps(payload)


def make_classifier(handler, api_key="test-key", endpoint=DEFAULT_ENDPOINT):
    return MoodClassifier(
        api_key=api_key,
        endpoint=endpoint,
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


class TestPrompt:
    def test_prompt_lists_moods_and_text(self):
        prompt = build_prompt("Went for a long walk")
        for mood in MoodType:
            assert mood.value in prompt
        assert f"at most {MAX_KEYWORDS} keywords" in prompt
        assert prompt.endswith("Went for a long walk")
        assert '"mood": "happy"' in prompt


class TestParseAnalysis:
    """Test conversion of the model's text answer."""

    def test_plain_json(self):
        analysis = parse_analysis(analysis_json())
        assert analysis.mood is MoodType.HAPPY
        assert analysis.energy == 0.8
        assert analysis.keywords == ("sun", "friends")
        assert analysis.summary == "A bright day."

    def test_code_fences_stripped(self):
        raw = "```json\n" + analysis_json(mood="calm") + "\n```"
        assert parse_analysis(raw).mood is MoodType.CALM

    def test_unknown_mood_becomes_neutral(self):
        assert parse_analysis(analysis_json(mood="melancholic")).mood is MoodType.NEUTRAL

    def test_mood_tag_case_insensitive(self):
        assert parse_analysis(analysis_json(mood="Anxious")).mood is MoodType.ANXIOUS

    def test_missing_keywords_and_summary_allowed(self):
        raw = json.dumps({"mood": "sad", "energy": 0.2, "sentiment": -0.5})
        analysis = parse_analysis(raw)
        assert analysis.keywords == ()
        assert analysis.summary == ""

    def test_invalid_json(self):
        with pytest.raises(ClassificationError):
            parse_analysis("I think you are happy")

    def test_not_an_object(self):
        with pytest.raises(ClassificationError):
            parse_analysis("[1, 2, 3]")

    def test_missing_fields(self):
        with pytest.raises(ClassificationError, match="energy"):
            parse_analysis(json.dumps({"mood": "happy", "sentiment": 0.1}))

    def test_keywords_must_be_a_list(self):
        with pytest.raises(ClassificationError):
            parse_analysis(analysis_json(keywords="sun"))

    @pytest.mark.parametrize("field,value", [("energy", 1.5), ("sentiment", -2.0)])
    def test_out_of_range_values_rejected(self, field, value):
        with pytest.raises(ClassificationError) as exc_info:
            parse_analysis(analysis_json(**{field: value}))
        assert isinstance(exc_info.value.__cause__, ValidationError)


class TestMoodClassifier:
    """Test the HTTP round trip."""

    @pytest.mark.asyncio
    async def test_successful_analysis(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["request"] = request
            return httpx.Response(200, json=gemini_body(analysis_json()))

        classifier = make_classifier(handler)
        analysis = await classifier.analyze("Lunch with friends in the sun")

        assert analysis.mood is MoodType.HAPPY
        assert analysis.sentiment == 0.6

        request = captured["request"]
        assert request.method == "POST"
        assert request.url.params["key"] == "test-key"
        assert request.url.host == "generativelanguage.googleapis.com"
        body = json.loads(request.content)
        prompt = body["contents"][0]["parts"][0]["text"]
        assert prompt.endswith("Lunch with friends in the sun")

    @pytest.mark.asyncio
    async def test_fenced_answer(self):
        def handler(request):
            return httpx.Response(200, json=gemini_body("```json\n" + analysis_json(mood="peaceful") + "\n```"))

        analysis = await make_classifier(handler).analyze("quiet evening")
        assert analysis.mood is MoodType.PEACEFUL

    @pytest.mark.asyncio
    async def test_non_200_status(self):
        def handler(request):
            return httpx.Response(429, text="quota exceeded")

        with pytest.raises(ClassificationError, match="429"):
            await make_classifier(handler).analyze("text")

    @pytest.mark.asyncio
    async def test_no_candidates(self):
        def handler(request):
            return httpx.Response(200, json={"candidates": []})

        with pytest.raises(ClassificationError, match="no content"):
            await make_classifier(handler).analyze("text")

    @pytest.mark.asyncio
    async def test_body_not_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(ClassificationError):
            await make_classifier(handler).analyze("text")

    @pytest.mark.asyncio
    async def test_answer_not_json(self):
        def handler(request):
            return httpx.Response(200, json=gemini_body("You seem happy!"))

        with pytest.raises(ClassificationError):
            await make_classifier(handler).analyze("text")

    @pytest.mark.asyncio
    async def test_out_of_range_answer(self):
        def handler(request):
            return httpx.Response(200, json=gemini_body(analysis_json(energy=8)))

        with pytest.raises(ClassificationError) as exc_info:
            await make_classifier(handler).analyze("text")
        assert isinstance(exc_info.value.__cause__, ValidationError)

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ClassificationError) as exc_info:
            await make_classifier(handler).analyze("text")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=gemini_body(analysis_json()))

        with pytest.raises(ClassificationError, match="API key"):
            await make_classifier(handler, api_key=None).analyze("text")
        assert calls == []

    @pytest.mark.asyncio
    async def test_invalid_endpoint(self):
        def handler(request):
            return httpx.Response(200, json=gemini_body(analysis_json()))

        with pytest.raises(ClassificationError, match="endpoint"):
            await make_classifier(handler, endpoint="not a url").analyze("text")
