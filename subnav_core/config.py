# -*- coding: utf-8 -*-
import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from .models.settings import DEFAULT_MAIN_TRACK_NAMES, NavigationSettings

logger = logging.getLogger(__name__)

class AppConfig:
    def __init__(self, settings_filename='settings.json', settings_path: Optional[Union[str, Path]] = None):
        self.script_dir = Path(__file__).resolve().parent.parent
        if settings_path is not None:
            self.settings_path = Path(settings_path)
        else:
            self.settings_path = self.script_dir / settings_filename
        self.defaults = {
            # --- Navigation ---
            'dedup_epsilon_s': 0.001,
            'merge_gap_s': 0.18,
            'nav_buffer_s': 0.05,
            'main_track_names': list(DEFAULT_MAIN_TRACK_NAMES),

            # --- Playback ---
            'restart_threshold_s': 0.2,
            'loop_tail_s': 0.15,
            'loop_fallback_s': 5.0,
            'offset_step_s': 0.1,

            # --- Timeline ---
            'timeline_window_s': 30.0,

            # --- Export ---
            'export_format': 'srt',
            'export_encoding': 'utf-8',
        }
        self.settings = self.defaults.copy()
        self.load()

    def load(self):
        changed = False
        if self.settings_path.exists():
            try:
                with open(self.settings_path, 'r', encoding='utf-8') as f:
                    loaded_settings = json.load(f)

                # Older files stored the track list as one comma-separated string
                names = loaded_settings.get('main_track_names')
                if isinstance(names, str):
                    loaded_settings['main_track_names'] = [n.strip() for n in names.split(',') if n.strip()]
                    changed = True

                for key, default_value in self.defaults.items():
                    if key not in loaded_settings:
                        loaded_settings[key] = default_value
                        changed = True
                self.settings = loaded_settings
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Could not read settings %s: %s", self.settings_path, e)
                self.settings = self.defaults.copy()
                changed = True
        else:
            self.settings = self.defaults.copy()
            changed = True

        if changed:
            self.save()

    def save(self):
        try:
            keys_to_save = self.defaults.keys()
            settings_to_save = {k: self.settings.get(k) for k in keys_to_save if k in self.settings}
            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(settings_to_save, f, indent=4)
        except IOError as e:
            logger.error("Error saving settings: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def set(self, key: str, value: Any):
        self.settings[key] = value

    def navigation_settings(self) -> NavigationSettings:
        return NavigationSettings.from_config(self.settings)
