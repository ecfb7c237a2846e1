def format_clock(seconds: int) -> str:
    """MM:SS, as shown on the rest timer."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"

def format_duration(seconds: int) -> str:
    """H:MM:SS for an hour or more, M:SS below."""
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"

def format_volume(volume: float, unit: str = "kg") -> str:
    return f"{volume:,.0f} {unit}"

def format_weight(weight: float, unit: str = "kg") -> str:
    # 100.0 -> "100", 62.5 -> "62.5"
    return f"{weight:g} {unit}"
