"""
Edit Operations Registry.

Every backend-powered edit (retouch, filter, adjustment, auto-enhance,
background removal) is described by an EditOperation: how to call the
backend, how to name the result, and what to tell the user when there is no
image, no instruction, or the call fails. The session looks operations up by
name.

Classes:
    EditOperation: Description of one backend edit
    EditOperationRegistry: Registry of edit operations

Functions:
    register_default_operations: Register the built-in edits
    create_default_registry: New registry holding the built-in edits
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
import logging

from AY_Libs.constants import (
    OP_ADJUST,
    OP_AUTO_ENHANCE,
    OP_EDIT_IMAGE,
    OP_FILTER,
    OP_REMOVE_BACKGROUND,
    PREFIX_ADJUSTED,
    PREFIX_BG_REMOVED,
    PREFIX_EDITED,
    PREFIX_ENHANCED,
    PREFIX_FILTERED,
)
from AY_Libs.ImageEditingLib.image_models import ImageResource
from AY_Libs.SessionLib.edit_backend import BackendResult, EditBackend

logger = logging.getLogger(__name__)

# (backend, image, instruction) -> result; instruction is None for
# operations that take no instruction
BackendCall = Callable[[EditBackend, ImageResource, Optional[str]], BackendResult]


@dataclass(frozen=True)
class EditOperation:
    """Description of one backend edit.

    Attributes:
        name: Registry key (e.g. 'filter')
        call: Invokes the backend
        name_prefix: Prefix of result resource names (e.g. 'filtered')
        no_image_message: Shown when no image is loaded
        failure_message: Shown, followed by the backend's message, when the call fails
        requires_instruction: Whether an empty instruction must be rejected
        empty_instruction_message: Shown when a required instruction is empty
    """
    name: str
    call: BackendCall
    name_prefix: str
    no_image_message: str
    failure_message: str
    requires_instruction: bool = True
    empty_instruction_message: str = "Please enter a description for your edit."


class EditOperationRegistry:
    """
    Registry of backend edit operations.

    Example:
        >>> registry = EditOperationRegistry()
        >>> registry.register(EditOperation("sketch", call, "sketched", "...", "..."))
        >>> registry.get_operation("sketch").name_prefix
        'sketched'
    """

    def __init__(self):
        self._operations: Dict[str, EditOperation] = {}

    def register(self, operation: EditOperation) -> None:
        """
        Register an edit operation.

        Raises:
            ValueError: If the name is empty or the call is not callable
            RuntimeError: If the name is already registered
        """
        name = str(operation.name).strip()

        if not name:
            raise ValueError("operation name cannot be empty")

        if not callable(operation.call):
            raise ValueError(f"operation call must be callable, got {type(operation.call)}")

        if name in self._operations:
            raise RuntimeError(
                f"Edit operation '{name}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._operations[name] = operation
        logger.debug(f"Registered edit operation: {name}")

    def unregister(self, name: str) -> bool:
        name = str(name).strip()
        if name in self._operations:
            del self._operations[name]
            logger.debug(f"Unregistered edit operation: {name}")
            return True
        return False

    def get_operation(self, name: str) -> EditOperation:
        """
        Raises:
            KeyError: If no operation is registered under name
        """
        name = str(name).strip()
        if name not in self._operations:
            available = ", ".join(self.list_operations())
            raise KeyError(
                f"No edit operation registered as '{name}'. "
                f"Available operations: {available}"
            )
        return self._operations[name]

    def has_operation(self, name: str) -> bool:
        return str(name).strip() in self._operations

    def list_operations(self) -> List[str]:
        return sorted(self._operations)

    def __len__(self) -> int:
        return len(self._operations)


def register_default_operations(registry: EditOperationRegistry) -> None:
    """
    Register the built-in edits:
    - edit-image: free-form retouch instruction
    - filter: stylistic filter prompt
    - adjust: photographic adjustment prompt
    - auto-enhance: fixed enhancement prompt, sent through the adjustment call
    - remove-background: no instruction
    """
    registry.register(EditOperation(
        name=OP_EDIT_IMAGE,
        call=lambda backend, image, instruction: backend.edit_image(image, instruction),
        name_prefix=PREFIX_EDITED,
        no_image_message="No image loaded to edit.",
        failure_message="Failed to generate the image.",
        empty_instruction_message="Please enter a description for your edit.",
    ))
    registry.register(EditOperation(
        name=OP_FILTER,
        call=lambda backend, image, instruction: backend.filter_image(image, instruction),
        name_prefix=PREFIX_FILTERED,
        no_image_message="No image loaded to apply a filter to.",
        failure_message="Failed to apply the filter.",
        empty_instruction_message="Please choose or describe a filter.",
    ))
    registry.register(EditOperation(
        name=OP_ADJUST,
        call=lambda backend, image, instruction: backend.adjust_image(image, instruction),
        name_prefix=PREFIX_ADJUSTED,
        no_image_message="No image loaded to apply an adjustment to.",
        failure_message="Failed to apply the adjustment.",
        empty_instruction_message="Please choose or describe an adjustment.",
    ))
    registry.register(EditOperation(
        name=OP_AUTO_ENHANCE,
        call=lambda backend, image, instruction: backend.adjust_image(image, instruction),
        name_prefix=PREFIX_ENHANCED,
        no_image_message="No image loaded to enhance.",
        failure_message="Failed to auto-enhance image.",
    ))
    registry.register(EditOperation(
        name=OP_REMOVE_BACKGROUND,
        call=lambda backend, image, instruction: backend.remove_background(image),
        name_prefix=PREFIX_BG_REMOVED,
        no_image_message="No image loaded to remove background from.",
        failure_message="Failed to remove background.",
        requires_instruction=False,
    ))
    logger.debug("Registered default edit operations")


def create_default_registry() -> EditOperationRegistry:
    registry = EditOperationRegistry()
    register_default_operations(registry)
    return registry
