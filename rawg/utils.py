import re

_KEY_PARAM_RE = re.compile(r"([?&]key=)[^&#]*")


def redact_url(url: str, limit: int | None = 120) -> str:
    """
    Hide the API key in a request URL before it reaches a log line.

    Long URLs are shortened to `limit` characters.
    """
    redacted = _KEY_PARAM_RE.sub(r"\1***", str(url))
    if limit is not None and len(redacted) > limit:
        return f"{redacted[:limit]}..."
    return redacted
