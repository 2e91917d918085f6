import os


class Config:
    """Runtime settings, read from the environment (.env is loaded by app.py)."""

    def __init__(self):
        self.gemini_api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
        self.gemini_model = os.getenv("GEMINI_MODEL", "gemini-2.5-pro")

        self.database_url = os.getenv("DATABASE_URL")
        self.database_service_key = os.getenv("DATABASE_SERVICE_KEY")
        # On serverless hosts the project root is read-only, so we must use /tmp
        default_sqlite = "/tmp/predictions.db" if os.getenv("VERCEL") or os.getenv("AWS_LAMBDA_FUNCTION_NAME") else "predictions.db"
        self.sqlite_path = os.getenv("SQLITE_PATH", default_sqlite)

        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.port = int(os.getenv("PORT", 5000))
