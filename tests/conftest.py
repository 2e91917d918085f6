import os
import json
from unittest.mock import MagicMock

import pytest
from google.genai import types

# Keep module-level services in routes.predict offline
os.environ.pop("GEMINI_API_KEY", None)
os.environ.pop("API_KEY", None)
os.environ.pop("DATABASE_URL", None)

import routes.predict
from app import app as flask_app
from services.gemini_service import GeminiService
from services.database_service import DatabaseService


SAMPLE_PREDICTION = {
    "prediction": "Arsenal to Win",
    "confidence": "Medium",
    "drawProbability": "24%",
    "analysis": "Arsenal have won four of their last five at home.",
    "keyStats": {"teamA_form": "WWDWW", "teamB_form": "LDWLW", "head_to_head": "Arsenal unbeaten in 3"},
    "bestBets": [{"category": "Match Winner", "value": "Arsenal", "reasoning": "Home form", "confidence": "70%"}],
    "availabilityFactors": "No significant availability issues reported.",
    "venue": "Emirates Stadium, London",
    "kickoffTime": "17:30 GMT, Saturday",
    "referee": "Michael Oliver",
    "leagueContext": {"leagueName": "Premier League", "isRivalry": True, "isDerby": True},
    "playerStats": [{"playerName": "Bukayo Saka", "teamName": "Arsenal", "goals": 8, "assists": 6}],
    "goalScorerPredictions": [{"playerName": "Bukayo Saka", "teamName": "Arsenal", "probability": "High"}],
}


def make_response(text=None, finish_reason=types.FinishReason.STOP, block_reason=None, no_candidates=False):
    prompt_feedback = None
    if block_reason:
        prompt_feedback = types.GenerateContentResponsePromptFeedback(block_reason=block_reason)

    if no_candidates:
        return types.GenerateContentResponse(candidates=[], prompt_feedback=prompt_feedback)

    content = None
    if text is not None:
        content = types.Content(role="model", parts=[types.Part(text=text)])
    candidate = types.Candidate(content=content, finish_reason=finish_reason)
    return types.GenerateContentResponse(candidates=[candidate], prompt_feedback=prompt_feedback)


@pytest.fixture
def sample_prediction():
    return json.loads(json.dumps(SAMPLE_PREDICTION))


@pytest.fixture
def genai_client(sample_prediction):
    client = MagicMock()
    client.models.generate_content.return_value = make_response(json.dumps(sample_prediction))
    return client


@pytest.fixture
def gemini_service(genai_client):
    return GeminiService(api_key="test-key", model="gemini-2.5-pro", client=genai_client)


@pytest.fixture
def db_service(tmp_path):
    return DatabaseService(db_url="", sqlite_path=str(tmp_path / "predictions.db"))


@pytest.fixture
def client(monkeypatch, gemini_service, db_service):
    monkeypatch.setattr(routes.predict, "gemini_service", gemini_service)
    monkeypatch.setattr(routes.predict, "db_service", db_service)
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as test_client:
        yield test_client


@pytest.fixture
def match_request():
    return {"teamA": "Arsenal", "teamB": "Tottenham", "matchCategory": "Premier League"}
