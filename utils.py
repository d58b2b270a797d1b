WARNING_KEYWORDS = ("suicide", "self-harm", "kill myself", "harm myself", "end my life")


def contains_sensitive_content(text):
    """Return True if text mentions any of the distress keywords."""
    if not text:
        return False
    lowered = text.lower()
    return any(keyword in lowered for keyword in WARNING_KEYWORDS)
