"""
Error types raised by the Ayra retouch core.

Every error is local and recoverable: an operation that raises one of these
leaves the edit history exactly as it was before the attempt. The message of
each error is the text shown to the user.

Classes:
    AyraError: Base class for all retouch core errors
    NoImageLoaded: An operation needs a current image and there is none
    EmptyInstruction: The composed instruction is empty or whitespace-only
    NoSelection: A crop was requested without a usable selection
    InvalidCropGeometry: The selection geometry cannot be mapped onto the source
    BackendFailure: The edit backend failed or returned an unusable result
    RenderUnavailable: A raster surface could not be decoded or allocated
    EditInProgress: An edit was submitted while another one is pending
    EmptyPayload: An uploaded resource carries no bytes
    InvalidDataUrl: A data URL could not be parsed into a resource
"""


class AyraError(Exception):
    """Base class for retouch core errors."""


class NoImageLoaded(AyraError):
    pass


class EmptyInstruction(AyraError):
    pass


class NoSelection(AyraError):
    pass


class InvalidCropGeometry(NoSelection):
    pass


class BackendFailure(AyraError):
    pass


class RenderUnavailable(AyraError):
    pass


class EditInProgress(AyraError):
    pass


class EmptyPayload(AyraError):
    pass


class InvalidDataUrl(AyraError):
    pass
