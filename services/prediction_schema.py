from google.genai import types


def _string(description=None):
    return types.Schema(type=types.Type.STRING, description=description)


def _integer():
    return types.Schema(type=types.Type.INTEGER)


def _boolean():
    return types.Schema(type=types.Type.BOOLEAN)


def _object(**properties):
    return types.Schema(type=types.Type.OBJECT, properties=properties)


def _array(items):
    return types.Schema(type=types.Type.ARRAY, items=items)


# Passed verbatim as response_schema so Gemini returns this shape as JSON
PREDICTION_SCHEMA = _object(
    prediction=_string("The match outcome prediction, e.g., 'Team A to Win', 'Draw'."),
    confidence=_string("The confidence level for the prediction: 'High', 'Medium', or 'Low'."),
    drawProbability=_string("The estimated probability of a draw, e.g., '25%'."),
    analysis=_string("A detailed, 2-3 paragraph analysis covering team form, tactics, and key matchups."),
    keyStats=_object(
        teamA_form=_string("Recent form for Team A (last 5 games), e.g., 'WWLDW'."),
        teamB_form=_string("Recent form for Team B (last 5 games), e.g., 'DLLWW'."),
        head_to_head=_string("A brief summary of recent head-to-head results."),
    ),
    bestBets=_array(_object(
        category=_string("Betting market category, e.g., 'Match Winner'."),
        value=_string("The predicted value for the bet, e.g., 'Team A'."),
        reasoning=_string("A brief justification for this bet."),
        confidence=_string("Confidence in the bet as a percentage, e.g., '80%'."),
        overValue=_string("The 'Over' value for goal-based bets, e.g., 'Over 2.5'."),
        overConfidence=_string("Confidence for the 'Over' bet."),
        underValue=_string("The 'Under' value for goal-based bets, e.g., 'Under 2.5'."),
        underConfidence=_string("Confidence for the 'Under' bet."),
    )),
    availabilityFactors=_string("Key injuries or suspensions, or 'No significant availability issues reported.'."),
    venue=_string("The match venue, e.g., 'Anfield, Liverpool'."),
    kickoffTime=_string("The match start time, e.g., '20:00 GMT, Saturday'."),
    referee=_string("The name of the match referee, e.g., 'Michael Oliver'."),
    leagueContext=_object(
        leagueName=_string(),
        teamA_position=_string(),
        teamB_position=_string(),
        isRivalry=_boolean(),
        isDerby=_boolean(),
        contextualAnalysis=_string("Analysis related to league standings or rivalry context."),
    ),
    playerStats=_array(_object(
        playerName=_string(),
        teamName=_string(),
        position=_string(),
        goals=_integer(),
        assists=_integer(),
        yellowCards=_integer(),
        redCards=_integer(),
    )),
    goalScorerPredictions=_array(_object(
        playerName=_string(),
        teamName=_string(),
        probability=_string("'High', 'Medium', or 'Low'."),
        reasoning=_string(),
    )),
)
