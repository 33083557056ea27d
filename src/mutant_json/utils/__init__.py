from .deferred import Steps, drive, is_deferred, settled

__all__ = ["Steps", "drive", "is_deferred", "settled"]
