"""Parser and navigation engine for multi-track dialogue scripts."""

from .models.settings import NavigationSettings
from .subtitles.data import SubtitleScript

__all__ = ["NavigationSettings", "SubtitleScript"]

__version__ = "0.3.0"
