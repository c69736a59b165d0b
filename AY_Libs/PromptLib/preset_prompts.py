"""
Preset prompt pickers for the filter and adjustment panels.

Each panel offers a handful of named presets plus a custom prompt field. The
two are mutually exclusive: picking a preset clears the custom text and
typing custom text clears the preset.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from AY_Libs.constants import ADJUSTMENT_PRESETS, FILTER_PRESETS


@dataclass(frozen=True)
class PresetPicker:
    presets: Dict[str, str]
    selected_preset: Optional[str] = None
    custom_prompt: str = ""

    def preset_names(self) -> List[str]:
        return list(self.presets)

    def select_preset(self, name: str) -> "PresetPicker":
        if name not in self.presets:
            available = ", ".join(self.presets)
            raise KeyError(f"Unknown preset '{name}'. Available presets: {available}")
        return replace(self, selected_preset=name, custom_prompt="")

    def set_custom_prompt(self, text: str) -> "PresetPicker":
        return replace(self, selected_preset=None, custom_prompt=text)

    @property
    def active_prompt(self) -> str:
        if self.selected_preset is not None:
            return self.presets[self.selected_preset]
        return self.custom_prompt

    @property
    def can_apply(self) -> bool:
        return bool(self.active_prompt.strip())


def filter_picker() -> PresetPicker:
    return PresetPicker(presets=dict(FILTER_PRESETS))


def adjustment_picker() -> PresetPicker:
    return PresetPicker(presets=dict(ADJUSTMENT_PRESETS))
