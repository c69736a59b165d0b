"""
Tests for retouch instruction composition.
"""

import pytest

from AY_Libs.constants import (
    CLOTHING_COLORS,
    CLOTHING_STYLES,
    FACE_PROTECTION_PROMPT,
    RETOUCH_BADGES,
)
from AY_Libs.PromptLib.prompt_compositor import (
    AdvancedRetouch,
    CompositionState,
    SimpleRetouch,
    compose,
    compose_instruction,
    is_submittable,
    outfit_instruction,
    toggle_badge,
)


class TestComposeInstruction:
    """Tests for merging instruction sources."""

    def test_face_clause_precedes_badges(self):
        result = compose_instruction(
            badges=["Change hairstyle"],
            free_text="make it curly",
            face_protected=True,
        )

        assert result == (
            "do not touch face and don't change face elements and features. "
            "Change hairstyle, make it curly"
        )

    def test_everything_empty_is_empty(self):
        assert compose_instruction() == ""

    def test_face_protection_alone(self):
        assert compose_instruction(face_protected=True) == FACE_PROTECTION_PROMPT

    def test_badges_keep_selection_order(self):
        result = compose_instruction(badges=["Use cap", "Change pose", "Add makeup"])

        assert result == "Use cap, Change pose, Add makeup"

    def test_outfit_clause_lowercases_color(self):
        result = compose_instruction(style="hoodie", color="Red", free_text="in the rain")

        assert result == "replace outfit with a red hoodie, in the rain"

    def test_outfit_without_color(self):
        assert compose_instruction(style="suit") == "replace outfit with a suit"

    def test_color_without_style_is_ignored(self):
        assert compose_instruction(color="Blue") == ""

    def test_free_text_is_last(self):
        result = compose_instruction(badges=["Use specs"], style="jacket", free_text="smile")

        assert result.endswith(", smile")
        assert result.startswith("Use specs, replace outfit")

    def test_free_text_kept_verbatim(self):
        assert compose_instruction(free_text="  brighter  ") == "  brighter  "

    def test_is_pure(self):
        args = dict(badges=["Use cap"], free_text="x", face_protected=True)

        assert compose_instruction(**args) == compose_instruction(**args)


class TestOutfitInstruction:
    def test_no_style(self):
        assert outfit_instruction(None, "Red") == ""

    def test_style_and_color(self):
        assert outfit_instruction("dress", "Yellow") == "replace outfit with a yellow dress"


class TestToggleBadge:
    """Tests for badge selection."""

    def test_toggle_adds_then_removes(self):
        badges = toggle_badge((), "Use cap")
        assert badges == ("Use cap",)

        assert toggle_badge(badges, "Use cap") == ()

    def test_toggle_appends_after_existing(self):
        assert toggle_badge(("Use cap",), "Change pose") == ("Use cap", "Change pose")

    def test_reselecting_moves_badge_to_end(self):
        badges = toggle_badge(("Use cap", "Change pose"), "Use cap")
        badges = toggle_badge(badges, "Use cap")

        assert badges == ("Change pose", "Use cap")


class TestCompositionState:
    """Tests for mode-driven composition."""

    def test_defaults_to_simple_mode_with_face_protection(self):
        state = CompositionState()

        assert isinstance(state.mode, SimpleRetouch)
        assert state.face_protected is True
        assert compose(state) == FACE_PROTECTION_PROMPT

    def test_simple_mode_uses_badges(self):
        state = (
            CompositionState()
            .with_face_protection(False)
            .with_badge_toggled("Change background")
            .with_free_text("beach")
        )

        assert compose(state) == "Change background, beach"

    def test_advanced_mode_uses_outfit_only(self):
        state = (
            CompositionState()
            .with_face_protection(False)
            .with_badge_toggled("Use cap")
            .use_advanced()
            .with_style("t-shirt")
            .with_color("Green")
        )

        assert compose(state) == "replace outfit with a green t-shirt"

    def test_switching_modes_keeps_both_picks(self):
        state = (
            CompositionState()
            .with_face_protection(False)
            .with_badge_toggled("Use cap")
            .use_advanced()
            .with_style("suit")
            .use_simple()
        )

        assert compose(state) == "Use cap"
        assert compose(state.use_advanced()) == "replace outfit with a suit"

    def test_mode_and_stored_picks_agree(self):
        state = CompositionState().with_badge_toggled("Use specs")

        assert state.mode == state.simple == SimpleRetouch(badges=("Use specs",))

        state = state.use_advanced().with_color("Black")
        assert state.mode == state.advanced == AdvancedRetouch(color="Black")

    def test_unknown_mode(self):
        state = CompositionState(mode="wardrobe")

        with pytest.raises(TypeError):
            compose(state)


class TestCatalogueChoices:
    """Panel picks are limited to the badge and wardrobe catalogues."""

    def test_unknown_badge(self):
        with pytest.raises(ValueError, match="Unknown badge 'Fly'"):
            CompositionState().with_badge_toggled("Fly")

    def test_unknown_style(self):
        with pytest.raises(ValueError, match="Unknown clothing style 'cape'"):
            CompositionState().use_advanced().with_style("cape")

    def test_unknown_color(self):
        with pytest.raises(ValueError, match="Unknown clothing color 'Purple'"):
            CompositionState().use_advanced().with_color("Purple")

    def test_clearing_style_and_color(self):
        state = CompositionState().use_advanced().with_style("suit").with_color("Red")

        state = state.with_style(None).with_color(None)

        assert state.mode == AdvancedRetouch()

    def test_every_badge_composes_in_selection_order(self):
        state = CompositionState().with_face_protection(False)
        for label in RETOUCH_BADGES:
            state = state.with_badge_toggled(label)

        assert compose(state) == ", ".join(RETOUCH_BADGES)

    @pytest.mark.parametrize("style", CLOTHING_STYLES)
    def test_every_style_and_color_composes(self, style):
        for color in CLOTHING_COLORS:
            state = (
                CompositionState(face_protected=False)
                .use_advanced()
                .with_style(style)
                .with_color(color)
            )

            assert compose(state) == f"replace outfit with a {color.lower()} {style}"


class TestIsSubmittable:
    @pytest.mark.parametrize("instruction", [None, "", "   ", "\n\t"])
    def test_blank(self, instruction):
        assert not is_submittable(instruction)

    def test_face_clause_alone_is_submittable(self):
        assert is_submittable(FACE_PROTECTION_PROMPT)
