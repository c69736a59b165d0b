"""
Retouch instruction composition.

Three independent sources feed the instruction sent to the edit backend:

- A: toggle badges (simple mode), joined in the order they were selected
- B: a wardrobe pick (advanced mode), 'replace outfit with a <color> <style>'
- C: free text typed by the user, always last

The non-empty parts are joined with ', '. When face protection is on, the
fixed face clause is prefixed with '. ' (or emitted alone when nothing else
was composed). The result is a pure function of its inputs.

Classes:
    SimpleRetouch: Badge mode
    AdvancedRetouch: Wardrobe mode
    CompositionState: Mode, free text and face protection flag

Functions:
    compose_instruction: Merge all sources, each treated as optional
    compose: Merge the sources selected by a CompositionState's mode
    toggle_badge: Add or remove a badge, keeping selection order
    outfit_instruction: Build the wardrobe clause
    is_submittable: Whether an instruction may be sent to the backend
"""

from dataclasses import dataclass, field, replace
from typing import Collection, Optional, Sequence, Tuple, Union

from AY_Libs.constants import (
    CLOTHING_COLORS,
    CLOTHING_STYLES,
    DEFAULT_FACE_PROTECTED,
    FACE_PROTECTION_PROMPT,
    OUTFIT_PROMPT_PREFIX,
    PROMPT_PART_SEPARATOR,
    RETOUCH_BADGES,
    SAFETY_SEPARATOR,
)


@dataclass(frozen=True)
class SimpleRetouch:
    badges: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AdvancedRetouch:
    style: Optional[str] = None
    color: Optional[str] = None


RetouchMode = Union[SimpleRetouch, AdvancedRetouch]


@dataclass(frozen=True)
class CompositionState:
    """Inputs of the retouch panel.

    Both modes are kept so switching tabs does not lose the other mode's
    picks; only `mode` decides which one feeds the instruction.
    """
    mode: RetouchMode = field(default_factory=SimpleRetouch)
    free_text: str = ""
    face_protected: bool = DEFAULT_FACE_PROTECTED
    simple: SimpleRetouch = field(default_factory=SimpleRetouch)
    advanced: AdvancedRetouch = field(default_factory=AdvancedRetouch)

    def _current_simple(self) -> SimpleRetouch:
        return self.mode if isinstance(self.mode, SimpleRetouch) else self.simple

    def _current_advanced(self) -> AdvancedRetouch:
        return self.mode if isinstance(self.mode, AdvancedRetouch) else self.advanced

    def _with_simple(self, simple: SimpleRetouch) -> "CompositionState":
        mode = simple if isinstance(self.mode, SimpleRetouch) else self.mode
        return replace(self, simple=simple, mode=mode)

    def _with_advanced(self, advanced: AdvancedRetouch) -> "CompositionState":
        mode = advanced if isinstance(self.mode, AdvancedRetouch) else self.mode
        return replace(self, advanced=advanced, mode=mode)

    def use_simple(self) -> "CompositionState":
        simple = self._current_simple()
        return replace(self, mode=simple, simple=simple, advanced=self._current_advanced())

    def use_advanced(self) -> "CompositionState":
        advanced = self._current_advanced()
        return replace(self, mode=advanced, advanced=advanced, simple=self._current_simple())

    def with_badge_toggled(self, label: str) -> "CompositionState":
        """
        Raises:
            ValueError: If label is not one of RETOUCH_BADGES
        """
        _check_choice("badge", label, RETOUCH_BADGES)
        badges = toggle_badge(self._current_simple().badges, label)
        return self._with_simple(SimpleRetouch(badges=badges))

    def with_style(self, style: Optional[str]) -> "CompositionState":
        if style is not None:
            _check_choice("clothing style", style, CLOTHING_STYLES)
        return self._with_advanced(replace(self._current_advanced(), style=style))

    def with_color(self, color: Optional[str]) -> "CompositionState":
        if color is not None:
            _check_choice("clothing color", color, CLOTHING_COLORS)
        return self._with_advanced(replace(self._current_advanced(), color=color))

    def with_free_text(self, text: str) -> "CompositionState":
        return replace(self, free_text=text)

    def with_face_protection(self, enabled: bool) -> "CompositionState":
        return replace(self, face_protected=bool(enabled))


def _check_choice(kind: str, value: str, choices: Collection[str]) -> None:
    if value not in choices:
        available = ", ".join(choices)
        raise ValueError(f"Unknown {kind} '{value}'. Available: {available}")


def toggle_badge(badges: Sequence[str], label: str) -> Tuple[str, ...]:
    """Remove label if selected, otherwise append it after the current picks."""
    if label in badges:
        return tuple(badge for badge in badges if badge != label)
    return tuple(badges) + (label,)


def outfit_instruction(style: Optional[str], color: Optional[str]) -> str:
    if not style:
        return ""
    if color:
        return f"{OUTFIT_PROMPT_PREFIX} {color.lower()} {style}"
    return f"{OUTFIT_PROMPT_PREFIX} {style}"


def compose_instruction(
    badges: Sequence[str] = (),
    style: Optional[str] = None,
    color: Optional[str] = None,
    free_text: str = "",
    face_protected: bool = False,
) -> str:
    """
    Merge every instruction source into one string.

    Args:
        badges: Selected badge labels, in selection order
        style: Wardrobe style, or None
        color: Wardrobe color name, or None (ignored without a style)
        free_text: User-typed instruction
        face_protected: Prefix the face protection clause

    Returns:
        The composed instruction; empty when every source is empty and
        face protection is off
    """
    parts = [badge for badge in badges if badge]

    outfit = outfit_instruction(style, color)
    if outfit:
        parts.append(outfit)

    if free_text:
        parts.append(free_text)

    combined = PROMPT_PART_SEPARATOR.join(parts)

    if face_protected:
        if combined:
            return f"{FACE_PROTECTION_PROMPT}{SAFETY_SEPARATOR}{combined}"
        return FACE_PROTECTION_PROMPT
    return combined


def compose(state: CompositionState) -> str:
    """Compose the instruction for the active retouch mode."""
    mode = state.mode
    if isinstance(mode, SimpleRetouch):
        return compose_instruction(
            badges=mode.badges,
            free_text=state.free_text,
            face_protected=state.face_protected,
        )
    if isinstance(mode, AdvancedRetouch):
        return compose_instruction(
            style=mode.style,
            color=mode.color,
            free_text=state.free_text,
            face_protected=state.face_protected,
        )
    raise TypeError(f"Unknown retouch mode: {type(mode).__name__}")


def is_submittable(instruction: Optional[str]) -> bool:
    return bool(instruction and instruction.strip())
