from .pointer import escape, join, tap, unescape

__all__ = ["escape", "join", "tap", "unescape"]
