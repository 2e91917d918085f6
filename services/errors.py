from enum import Enum


class ErrorKind(Enum):
    BLOCKED_PROMPT = "blocked_prompt"
    BLOCKED_COMPLETION = "blocked_completion"
    TRUNCATED = "truncated"
    EMPTY_RESPONSE = "empty_response"
    PARSE_FAILURE = "parse_failure"
    AUTH_FAILURE = "auth_failure"
    QUOTA_EXCEEDED = "quota_exceeded"
    STORAGE_FAILURE = "storage_failure"
    UNKNOWN = "unknown"


STATUS_CODES = {
    ErrorKind.BLOCKED_PROMPT: 400,
    ErrorKind.BLOCKED_COMPLETION: 400,
    ErrorKind.TRUNCATED: 500,
    ErrorKind.EMPTY_RESPONSE: 500,
    ErrorKind.PARSE_FAILURE: 500,
    ErrorKind.AUTH_FAILURE: 401,
    ErrorKind.QUOTA_EXCEEDED: 429,
    ErrorKind.STORAGE_FAILURE: 500,
    ErrorKind.UNKNOWN: 500,
}

PREFIXES = {
    ErrorKind.BLOCKED_PROMPT: "[Safety Block]",
    ErrorKind.BLOCKED_COMPLETION: "[Safety Block]",
    ErrorKind.TRUNCATED: "[Prediction Error]",
    ErrorKind.EMPTY_RESPONSE: "[Prediction Error]",
    ErrorKind.PARSE_FAILURE: "[Invalid Response]",
}

# Kinds whose detail may leak internals (keys, SQL) get a fixed message instead.
PUBLIC_MESSAGES = {
    ErrorKind.AUTH_FAILURE: "[API Key Error] The Gemini API key is invalid or missing. Please check the server configuration.",
    ErrorKind.QUOTA_EXCEEDED: "[Quota Error] The application has exceeded its API usage limit. Please try again later.",
    ErrorKind.STORAGE_FAILURE: "[Database Error] A problem occurred while saving the prediction.",
    ErrorKind.UNKNOWN: "[Prediction Error] An unexpected issue occurred.",
}


class PredictionError(Exception):
    """A failure tagged with the kind of thing that went wrong."""

    def __init__(self, kind, message=""):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self):
        return STATUS_CODES[self.kind]

    @property
    def user_message(self):
        if self.kind in PUBLIC_MESSAGES:
            return PUBLIC_MESSAGES[self.kind]
        return f"{PREFIXES[self.kind]} {self.message}"
