def sse(event: str, data: str) -> str:
    """Format one server-sent event; multi-line data becomes several data lines."""
    lines = (data or "").split("\n")
    body = "\n".join(f"data: {line}" for line in lines)
    return f"event: {event}\n{body}\n\n"
