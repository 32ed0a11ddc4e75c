from .enums import TrackKind
from .settings import DEFAULT_MAIN_TRACK_NAMES, NavigationSettings, SettingsError

__all__ = [
    "DEFAULT_MAIN_TRACK_NAMES",
    "NavigationSettings",
    "SettingsError",
    "TrackKind",
]
