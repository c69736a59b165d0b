"""
Tests for the filter and adjustment preset pickers.
"""

import pytest

from AY_Libs.constants import ADJUSTMENT_PRESETS, FILTER_PRESETS
from AY_Libs.PromptLib.preset_prompts import PresetPicker, adjustment_picker, filter_picker


class TestPresetPicker:
    def test_starts_with_nothing_to_apply(self):
        picker = filter_picker()

        assert picker.active_prompt == ""
        assert not picker.can_apply

    def test_catalogues(self):
        assert filter_picker().preset_names() == list(FILTER_PRESETS)
        assert adjustment_picker().preset_names() == ["Blur BG", "Enhance", "Warmer", "Studio"]

    def test_select_preset(self):
        picker = adjustment_picker().select_preset("Warmer")

        assert picker.active_prompt == ADJUSTMENT_PRESETS["Warmer"]
        assert picker.can_apply

    def test_selecting_preset_clears_custom_prompt(self):
        picker = filter_picker().set_custom_prompt("make it teal").select_preset("Anime")

        assert picker.custom_prompt == ""
        assert picker.active_prompt == FILTER_PRESETS["Anime"]

    def test_custom_prompt_clears_preset(self):
        picker = filter_picker().select_preset("Lomo").set_custom_prompt("sepia")

        assert picker.selected_preset is None
        assert picker.active_prompt == "sepia"

    def test_blank_custom_prompt_cannot_apply(self):
        assert not filter_picker().set_custom_prompt("   ").can_apply

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="Unknown preset 'Vivid'"):
            filter_picker().select_preset("Vivid")

    def test_pickers_do_not_share_presets(self):
        picker = PresetPicker(presets={"A": "alpha"})

        assert picker.select_preset("A").presets is picker.presets
        assert filter_picker().presets is not filter_picker().presets
