import logging

from flask import Blueprint, request, jsonify

from services.gemini_service import GeminiService
from services.database_service import DatabaseService
from services.errors import ErrorKind, PredictionError
from utils.formatter import format_error_response, clamp_limit

logger = logging.getLogger("tipster")

predict_bp = Blueprint('predict', __name__)
gemini_service = GeminiService()
db_service = DatabaseService()

REQUIRED_FIELDS = ("teamA", "teamB", "matchCategory")


def _read_match_request():
    data = request.get_json(force=True)
    if not isinstance(data, dict):
        raise PredictionError(ErrorKind.UNKNOWN, "Request body must be a JSON object")
    missing = [k for k in REQUIRED_FIELDS if not data.get(k)]
    if missing:
        raise PredictionError(ErrorKind.UNKNOWN, f"Missing required fields: {', '.join(missing)}")
    return data["teamA"], data["teamB"], data["matchCategory"]


@predict_bp.route('/predict', methods=['POST'])
def predict_match():
    """
    Generate, store and return a match prediction.
    Expected JSON: {"teamA": "Team A", "teamB": "Team B", "matchCategory": "Premier League"}
    """
    try:
        team_a, team_b, match_category = _read_match_request()
        prediction_data = gemini_service.get_prediction(team_a, team_b, match_category)
        saved_prediction = db_service.save_prediction(team_a, team_b, match_category, prediction_data)
        return jsonify(saved_prediction), 200
    except PredictionError as e:
        logger.error(f"Prediction failed ({e.kind.value}): {e.message}")
        body, status = format_error_response(e)
    except Exception as e:
        logger.exception(f"Unexpected error in predict endpoint: {e}")
        body, status = format_error_response(e)
    return jsonify(body), status


@predict_bp.route('/predictions', methods=['GET'])
def recent_predictions():
    limit = clamp_limit(request.args.get('limit'))
    try:
        return jsonify(db_service.get_recent_predictions(limit=limit))
    except PredictionError as e:
        logger.error(f"Listing predictions failed ({e.kind.value}): {e.message}")
        body, status = format_error_response(e)
    except Exception as e:
        logger.exception(f"Unexpected error listing predictions: {e}")
        body, status = format_error_response(e)
    return jsonify(body), status


@predict_bp.route('/health', methods=['GET'])
def health():
    return jsonify({
        "status": "ok",
        "model": gemini_service.model,
        "gemini_configured": gemini_service.client is not None,
        "database": db_service.backend,
    })
