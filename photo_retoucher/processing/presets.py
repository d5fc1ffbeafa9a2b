from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import appdirs

from ..utils.errors import AppError, ConfigurationError, ErrorCategory, handle_errors
from ..utils.logger import get_logger
from .parameters import AdjustmentParameters

logger = get_logger(__name__)

APP_NAME = "PhotoRetoucher"
APP_AUTHOR = "PhotoRetoucher"

# One-click looks offered next to the sliders
BUILTIN_PRESETS: Dict[str, AdjustmentParameters] = {
    "facebook": AdjustmentParameters(brightness=5, contrast=10, shadows=20, highlights=-10, smoothing=40, sharpness=60),
    "portrait": AdjustmentParameters(brightness=8, contrast=5, shadows=15, highlights=-5, smoothing=70, sharpness=35),
    "backlight": AdjustmentParameters(brightness=20, contrast=12, shadows=85, highlights=-60, smoothing=0, sharpness=30),
    "reset": AdjustmentParameters(),
}


def list_builtin_presets() -> List[str]:
    return list(BUILTIN_PRESETS)


def get_builtin_preset(name: str) -> AdjustmentParameters:
    key = (name or "").strip().lower()
    if key not in BUILTIN_PRESETS:
        raise ConfigurationError(
            f"Unknown preset '{name}'",
            setting_name="preset",
            user_message=f"Unknown preset '{name}'. Choose one of: {', '.join(BUILTIN_PRESETS)}",
        )
    return BUILTIN_PRESETS[key]


@dataclass(frozen=True)
class AdjustmentPreset:
    """A user-defined snapshot of the six sliders."""
    id: str
    name: str
    parameters: AdjustmentParameters

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "parameters": self.parameters.to_dict()}


def _slugify(name: str) -> str:
    # Minimal slugify: keep it predictable and filesystem/json safe.
    slug = name.strip().lower().replace(" ", "_").replace("-", "_")
    slug = "".join(ch for ch in slug if (ch.isalnum() or ch == "_"))
    return slug or "preset"


def _parse_preset(preset: dict, source: str) -> Optional[AdjustmentPreset]:
    if not isinstance(preset, dict):
        logger.warning("Invalid adjustment preset from %s: expected dict", source)
        return None

    preset_id = preset.get("id")
    name = preset.get("name")
    params = preset.get("parameters")

    if not isinstance(preset_id, str) or not preset_id.strip():
        logger.warning("Invalid adjustment preset from %s: missing/invalid 'id'", source)
        return None
    if not isinstance(name, str) or not name.strip():
        logger.warning("Invalid adjustment preset '%s' from %s: missing/invalid 'name'", preset_id, source)
        return None
    if not isinstance(params, dict):
        logger.warning("Invalid adjustment preset '%s' from %s: missing/invalid 'parameters'", preset_id, source)
        return None
    try:
        parameters = AdjustmentParameters.from_dict(params)
    except AppError as e:
        logger.warning("Invalid adjustment preset '%s' from %s: %s", preset_id, source, e)
        return None

    return AdjustmentPreset(preset_id.strip(), name.strip(), parameters)


@handle_errors(fallback_value=list, category=ErrorCategory.CONFIGURATION, log_level="exception")
def _read_presets_file(path: str) -> list:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        logger.warning("Adjustment presets file %s must contain a JSON list.", path)
        return []
    return data


class AdjustmentPresetManager:
    """
    Load/save user adjustment presets.

    File format: JSON list of objects:
      { "id": "...", "name": "...", "parameters": { "brightness": 5, ... } }
    """

    def __init__(self, presets_file: Optional[str] = None):
        if presets_file:
            self.presets_file = presets_file
        else:
            data_dir = appdirs.user_data_dir(APP_NAME, APP_AUTHOR)
            self.presets_file = os.path.join(data_dir, "adjustment_presets.json")

        self._presets: Dict[str, AdjustmentPreset] = {}
        self.load()

    def load(self) -> None:
        self._presets = {}
        if not os.path.isfile(self.presets_file):
            logger.info("No adjustment presets file found at %s.", self.presets_file)
            return

        for idx, raw in enumerate(_read_presets_file(self.presets_file)):
            preset = _parse_preset(raw, source=f"{self.presets_file}#{idx}")
            if preset:
                self._presets[preset.id] = preset

        logger.info("Loaded %s adjustment presets from %s.", len(self._presets), self.presets_file)

    def list_presets(self) -> List[AdjustmentPreset]:
        return sorted(self._presets.values(), key=lambda p: p.name)

    def get_preset(self, preset_id: str) -> Optional[AdjustmentPreset]:
        return self._presets.get(preset_id)

    def resolve(self, name: str) -> AdjustmentParameters:
        """Look up a built-in preset first, then a user preset by id."""
        if (name or "").strip().lower() in BUILTIN_PRESETS:
            return get_builtin_preset(name)
        preset = self.get_preset(name)
        if preset is None:
            raise ConfigurationError(f"Unknown preset '{name}'", setting_name="preset")
        return preset.parameters

    def _save(self) -> None:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(self.presets_file)), exist_ok=True)
            with open(self.presets_file, "w", encoding="utf-8") as f:
                json.dump([p.to_dict() for p in self.list_presets()], f, indent=2)
        except OSError as e:
            raise ConfigurationError(
                f"Failed saving adjustment presets to {self.presets_file}",
                setting_name="presets_file",
                original_error=e,
            ) from e
        logger.info("Saved %s adjustment presets to %s.", len(self._presets), self.presets_file)

    def add_preset(
        self,
        name: str,
        parameters: AdjustmentParameters,
        preset_id: Optional[str] = None,
        *,
        overwrite: bool = False,
    ) -> Tuple[bool, str]:
        resolved_id = (preset_id or _slugify(name)).strip()
        if resolved_id.lower() in BUILTIN_PRESETS:
            return False, f"'{resolved_id}' is a built-in preset"
        if not overwrite and resolved_id in self._presets:
            return False, f"Preset '{resolved_id}' already exists"

        self._presets[resolved_id] = AdjustmentPreset(resolved_id, name.strip() or resolved_id, parameters.validate())
        self._save()
        return True, resolved_id

    def delete_preset(self, preset_id: str) -> bool:
        if preset_id not in self._presets:
            return False
        self._presets.pop(preset_id, None)
        self._save()
        return True
