"""Media type helpers."""


def base_content_type(content_type: str | None) -> str:
    """Media type without parameters, lowercased ("text/plain; charset=x" -> "text/plain")."""
    return (content_type or "").split(";", 1)[0].strip().lower()
