from services.errors import InvalidArgument

# Range of the INTEGER columns parentId and paging values are bound against
INT_MIN = -2**31
INT_MAX = 2**31 - 1


def parse_parent_id(raw):
    value = (raw or "").strip() if isinstance(raw, str) else raw
    if value in (None, ""):
        raise InvalidArgument("Parent ID is required")
    try:
        parent_id = int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"Invalid Parent ID: {raw}")
    if not INT_MIN <= parent_id <= INT_MAX:
        raise InvalidArgument(f"Invalid Parent ID: {raw}")
    return parent_id


def normalize_marks(body):
    """Turn every accepted request body into a list of mark dicts.

    Accepted shapes: {"marks": [...]}, {"marks": {...}}, a bare list,
    or a single bare {"subject", "score"} object.
    """
    if body is None:
        raise InvalidArgument("Request body must be JSON")

    marks = body
    if isinstance(body, dict) and "marks" in body:
        marks = body["marks"]

    if isinstance(marks, dict):
        marks = [marks] if marks else []
    if not isinstance(marks, list):
        raise InvalidArgument("marks must be a list of {subject, score} objects")

    if not all(isinstance(mark, dict) for mark in marks):
        raise InvalidArgument("Each mark must be an object with subject and score")

    return marks


def parse_positive_int(raw, default):
    # Missing, malformed or out-of-range paging values fall back to the default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if 0 < value <= INT_MAX else default
