"""
Session configuration for Ayra.

Classes:
    SessionConfig: Tunable defaults for an edit session
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

from AY_Libs.constants import (
    DEFAULT_FACE_PROTECTED,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_PIXEL_RATIO,
    DOWNLOAD_PREFIX,
    UNLIMITED_LIBRARY_SIZE,
)
from AY_Libs.ImageEditingLib.image_editing_ops import mime_type_for_format


@dataclass
class SessionConfig:
    """Configuration for an edit session.

    Attributes:
        face_protected_default: Face protection state of a fresh retouch panel (default: True)
        output_format: Pillow format used to encode locally rendered images (default: PNG)
        download_prefix: Prefix added to the current image's name on download (default: 'edited-')
        default_pixel_ratio: Pixel ratio used for crops when neither the caller nor
                             the selection supplies one (default: 1.0)
        max_library_size: Maximum number of uploaded images kept in the library
                          (default: 0, unlimited)
    """
    face_protected_default: bool = DEFAULT_FACE_PROTECTED
    output_format: str = DEFAULT_OUTPUT_FORMAT
    download_prefix: str = DOWNLOAD_PREFIX
    default_pixel_ratio: float = DEFAULT_PIXEL_RATIO
    max_library_size: int = UNLIMITED_LIBRARY_SIZE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)

    @property
    def output_mime_type(self) -> str:
        return mime_type_for_format(self.output_format)

    @property
    def library_is_bounded(self) -> bool:
        return self.max_library_size > UNLIMITED_LIBRARY_SIZE
