"""
Edit session for Ayra.

An EditSession owns all state of one editing session (history, library,
retouch inputs, pending crop selection, busy flag, last error) and the
display handles of everything it presents. Each user action is a method;
actions that fail raise one of the AY_Libs.errors types, record its message
in `error`, and leave the history exactly as it was.

Classes:
    PresentationState: What the presentation layer renders
    EditSession: Wires user actions to the crop compositor, the edit backend
                 and the history ledger
"""

from dataclasses import dataclass
from functools import wraps
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple
import logging

from AY_Libs.constants import (
    AUTO_ENHANCE_PROMPT,
    OP_ADJUST,
    OP_AUTO_ENHANCE,
    OP_EDIT_IMAGE,
    OP_FILTER,
    OP_REMOVE_BACKGROUND,
)
from AY_Libs.errors import (
    AyraError,
    BackendFailure,
    EditInProgress,
    EmptyInstruction,
    EmptyPayload,
    NoImageLoaded,
)
from AY_Libs.DisplayLib.handle_manager import DisplayHandle, HandleGroup, ResourceLifetimeManager
from AY_Libs.HistoryLib.history_ledger import HistoryLedger
from AY_Libs.ImageEditingLib.crop_compositor import (
    CropCompositor,
    aspect_for_preset,
    fit_selection_to_aspect,
)
from AY_Libs.ImageEditingLib.image_editing_ops import ResourceNamer, save_resource
from AY_Libs.ImageEditingLib.image_models import CropSelection, ImageResource
from AY_Libs.PromptLib.preset_prompts import adjustment_picker, filter_picker
from AY_Libs.PromptLib.prompt_compositor import CompositionState, compose, is_submittable
from AY_Libs.SessionLib.edit_backend import EditBackend, coerce_result
from AY_Libs.SessionLib.edit_operations import EditOperationRegistry, create_default_registry
from AY_Libs.SessionLib.session_config import SessionConfig

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


@dataclass(frozen=True)
class PresentationState:
    current: Optional[ImageResource]
    original: Optional[ImageResource]
    can_undo: bool
    can_redo: bool
    current_handle: Optional[DisplayHandle]
    original_handle: Optional[DisplayHandle]
    library_handles: Tuple[DisplayHandle, ...]
    is_loading: bool
    error: Optional[str]


def user_action(method: Callable) -> Callable:
    """Clear the last error before the action and record it if the action fails."""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        self.error = None
        try:
            return method(self, *args, **kwargs)
        except AyraError as e:
            self.error = str(e)
            raise
    return wrapper


class EditSession:
    """
    One editing session.

    Example:
        >>> with EditSession(backend) as session:
        ...     session.upload([resource_from_file(Path("portrait.jpg"))])
        ...     session.composition = session.composition.with_badge_toggled("Change hairstyle")
        ...     session.retouch()
        ...     session.undo()
    """

    def __init__(
        self,
        backend: EditBackend,
        config: Optional[SessionConfig] = None,
        manager: Optional[ResourceLifetimeManager] = None,
        operations: Optional[EditOperationRegistry] = None,
        namer: Optional[ResourceNamer] = None,
    ):
        self.backend = backend
        self.config = config or SessionConfig()
        self.handles = manager or ResourceLifetimeManager()
        self.operations = operations or create_default_registry()
        self.namer = namer or ResourceNamer()
        self.cropper = CropCompositor(namer=self.namer, save_format=self.config.output_format)

        self.history = HistoryLedger()
        self.library: List[ImageResource] = []
        self.composition = CompositionState(face_protected=self.config.face_protected_default)
        self.filters = filter_picker()
        self.adjustments = adjustment_picker()
        self.crop_selection: Optional[CropSelection] = None
        self.crop_aspect: Optional[float] = None
        self.is_loading = False
        self.error: Optional[str] = None

        self._presented = HandleGroup(self.handles, name="presented")

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    @property
    def instruction(self) -> str:
        return compose(self.composition)

    def presentation(self) -> PresentationState:
        current = self.history.current()
        original = self.history.original()
        return PresentationState(
            current=current,
            original=original,
            can_undo=self.history.can_undo(),
            can_redo=self.history.can_redo(),
            current_handle=self._presented.handle_for(current),
            original_handle=self._presented.handle_for(original),
            library_handles=tuple(self._presented.handle_for(resource) for resource in self.library),
            is_loading=self.is_loading,
            error=self.error,
        )

    def _present(self, current: Optional[ImageResource], original: Optional[ImageResource]) -> None:
        self._presented.reconcile([current, original] + self.library)

    def _show_history(self) -> None:
        self._present(self.history.current(), self.history.original())

    def _commit(self, resource: ImageResource) -> None:
        """Append to history once the new image has a display handle."""
        self._present(resource, self.history.original() or resource)
        self.history.append(resource)
        self.crop_selection = None

    # ------------------------------------------------------------------
    # Library
    # ------------------------------------------------------------------

    @user_action
    def upload(self, resources: Iterable[ImageResource]) -> List[ImageResource]:
        """
        Add uploaded images to the library.

        The first upload is loaded for editing when nothing is loaded yet.

        Raises:
            EmptyPayload: If any resource carries no bytes; nothing is added then
        """
        resources = list(resources)
        for resource in resources:
            if not resource.data:
                raise EmptyPayload(f"The file '{resource.name}' is empty.")
        if not resources:
            return []

        previous_library = self.library
        self.library = self.library + resources
        if self.config.library_is_bounded:
            self.library = self.library[-self.config.max_library_size:]

        try:
            if self.history.current() is None:
                first = resources[0]
                self._present(first, first)
                self.history.load(first)
                self.crop_selection = None
            else:
                self._show_history()
        except Exception:
            self.library = previous_library
            raise

        logger.info(f"Uploaded {len(resources)} image(s); library holds {len(self.library)}")
        return resources

    @user_action
    def select_from_library(self, resource: ImageResource) -> None:
        """Start a new history with the selected image."""
        self._present(resource, resource)
        self.history.load(resource)
        self.crop_selection = None
        logger.info(f"Loaded {resource.name} for editing")

    @user_action
    def start_over(self) -> None:
        """Drop the history, the library and all panel inputs."""
        self.history.reset()
        self.library = []
        self.composition = CompositionState(face_protected=self.config.face_protected_default)
        self.filters = filter_picker()
        self.adjustments = adjustment_picker()
        self.crop_selection = None
        self._show_history()
        logger.info("Session reset")

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    @user_action
    def undo(self) -> bool:
        if not self.history.can_undo():
            return False
        self._present(self.history.entries[self.history.cursor - 1], self.history.original())
        self.history.undo()
        self.crop_selection = None
        return True

    @user_action
    def redo(self) -> bool:
        if not self.history.can_redo():
            return False
        self._present(self.history.entries[self.history.cursor + 1], self.history.original())
        self.history.redo()
        self.crop_selection = None
        return True

    # ------------------------------------------------------------------
    # Backend edits
    # ------------------------------------------------------------------

    @user_action
    def submit(self, operation_name: str, instruction: Optional[str] = None) -> ImageResource:
        """
        Run a backend edit on the current image and record the result.

        Args:
            operation_name: Registered edit operation (e.g. 'filter')
            instruction: Instruction for operations that take one

        Returns:
            The new current image

        Raises:
            EditInProgress: If another edit is pending
            NoImageLoaded: If there is no current image
            EmptyInstruction: If a required instruction is empty or whitespace
            BackendFailure: If the backend call fails or returns no usable image
        """
        operation = self.operations.get_operation(operation_name)

        if self.is_loading:
            raise EditInProgress("Another edit is still in progress.")

        current = self.history.current()
        if current is None:
            raise NoImageLoaded(operation.no_image_message)

        if operation.requires_instruction and not is_submittable(instruction):
            logger.warning(f"Rejected {operation.name}: empty instruction")
            raise EmptyInstruction(operation.empty_instruction_message)

        self.is_loading = True
        try:
            try:
                result = operation.call(self.backend, current, instruction)
                edited = coerce_result(result, self.namer.next_name(operation.name_prefix))
            except Exception as e:
                detail = str(e) or UNKNOWN_ERROR_MESSAGE
                logger.warning(f"{operation.name} on {current.name} failed: {detail}")
                raise BackendFailure(f"{operation.failure_message} {detail}") from e
        finally:
            self.is_loading = False

        self._commit(edited)
        logger.info(f"{operation.name} on {current.name} -> {edited.name}")
        return edited

    def generate(self, instruction: Optional[str] = None) -> ImageResource:
        """Retouch with an explicit instruction, or the composed one when omitted."""
        if instruction is None:
            instruction = self.instruction
        return self.submit(OP_EDIT_IMAGE, instruction)

    def retouch(self) -> ImageResource:
        return self.generate(self.instruction)

    def apply_filter(self, prompt: Optional[str] = None) -> ImageResource:
        if prompt is None:
            prompt = self.filters.active_prompt
        return self.submit(OP_FILTER, prompt)

    def apply_adjustment(self, prompt: Optional[str] = None) -> ImageResource:
        if prompt is None:
            prompt = self.adjustments.active_prompt
        return self.submit(OP_ADJUST, prompt)

    def auto_enhance(self) -> ImageResource:
        return self.submit(OP_AUTO_ENHANCE, AUTO_ENHANCE_PROMPT)

    def remove_background(self) -> ImageResource:
        return self.submit(OP_REMOVE_BACKGROUND)

    # ------------------------------------------------------------------
    # Crop
    # ------------------------------------------------------------------

    def set_crop_selection(self, selection: Optional[CropSelection]) -> None:
        if selection is not None:
            selection = fit_selection_to_aspect(selection, self.crop_aspect)
        self.crop_selection = selection

    def set_crop_aspect(self, preset_name: str) -> None:
        self.crop_aspect = aspect_for_preset(preset_name)
        if self.crop_selection is not None:
            self.crop_selection = fit_selection_to_aspect(self.crop_selection, self.crop_aspect)

    @user_action
    def apply_crop(self, pixel_ratio: Optional[float] = None) -> ImageResource:
        """
        Crop the current image to the pending selection and record the result.

        Args:
            pixel_ratio: Device pixel ratio; defaults to the selection's, then
                         to the configured default

        Raises:
            EditInProgress: If a backend edit is pending
            NoImageLoaded: If there is no current image
            NoSelection: If there is no usable selection
            RenderUnavailable: If the crop cannot be rendered
        """
        if self.is_loading:
            raise EditInProgress("Another edit is still in progress.")

        current = self.history.current()
        if current is None:
            raise NoImageLoaded("No image loaded to crop.")

        selection = self.crop_selection
        if pixel_ratio is None:
            if selection is not None and selection.pixel_ratio is not None:
                pixel_ratio = selection.pixel_ratio
            else:
                pixel_ratio = self.config.default_pixel_ratio

        cropped = self.cropper.crop(current, selection, pixel_ratio)
        self._commit(cropped)
        return cropped

    # ------------------------------------------------------------------
    # Export and teardown
    # ------------------------------------------------------------------

    @user_action
    def download(self, output_dir: Path) -> Path:
        current = self.history.current()
        if current is None:
            raise NoImageLoaded("No image loaded to download.")
        path = save_resource(current, Path(output_dir), self.config.download_prefix)
        logger.info(f"Saved {current.name} to {path}")
        return path

    def close(self) -> None:
        """Release every display handle this session holds."""
        self._presented.close()

    def __enter__(self) -> "EditSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
