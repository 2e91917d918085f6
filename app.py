import os
from dotenv import load_dotenv

# Load environment variables FIRST before any other imports
dotenv_path = os.path.join(os.path.dirname(__file__), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path=dotenv_path, override=True)

from config import Config
from services.logger import setup_logging

config = Config()
# Before the blueprint import, which builds the services and may log
logger = setup_logging(config.log_level)

from flask import Flask, jsonify
from flask_cors import CORS

from routes.predict import predict_bp
from utils.formatter import format_error_response

app = Flask(__name__)
CORS(app)

# Register Blueprints
app.register_blueprint(predict_bp, url_prefix='/api')


@app.errorhandler(404)
def not_found(e):
    return jsonify({"error": "Not Found"}), 404


@app.errorhandler(405)
def method_not_allowed(e):
    return jsonify({"error": "Method Not Allowed"}), 405


@app.errorhandler(500)
def internal_error(e):
    logger.error(f"Internal error: {e}")
    body, status = format_error_response(getattr(e, "original_exception", None) or e)
    return jsonify(body), status


if __name__ == '__main__':
    logger.info(f"Starting prediction service on port {config.port}")
    app.run(host='0.0.0.0', port=config.port, debug=True)
