"""
PromptLib - Instruction composition

Builds the instruction strings sent to the edit backend from retouch badges,
wardrobe picks, free text and presets.
"""

from AY_Libs.PromptLib.prompt_compositor import (
    SimpleRetouch,
    AdvancedRetouch,
    CompositionState,
    compose,
    compose_instruction,
    outfit_instruction,
    toggle_badge,
    is_submittable,
)
from AY_Libs.PromptLib.preset_prompts import (
    PresetPicker,
    filter_picker,
    adjustment_picker,
)

__all__ = [
    "SimpleRetouch",
    "AdvancedRetouch",
    "CompositionState",
    "compose",
    "compose_instruction",
    "outfit_instruction",
    "toggle_badge",
    "is_submittable",
    "PresetPicker",
    "filter_picker",
    "adjustment_picker",
]
