from services.errors import ErrorKind, PredictionError


def format_error_response(error):
    """
    Turns any exception into the (body, status) pair returned to the caller.
    Untagged exceptions are reported as the generic prediction error.
    """
    if not isinstance(error, PredictionError):
        error = PredictionError(ErrorKind.UNKNOWN, str(error))
    return {"error": error.user_message}, error.status_code


def clamp_limit(raw_limit, default=20, maximum=100):
    try:
        limit = int(raw_limit)
    except (TypeError, ValueError):
        return default
    return max(1, min(limit, maximum))
