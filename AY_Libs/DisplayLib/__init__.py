"""
DisplayLib - Display handle lifetime management

Issues, tracks and revokes the handles that make image resources
addressable to a rendering surface. The PyQt5 surface factory lives in
`AY_Libs.DisplayLib.qt_surfaces` and is imported on demand.
"""

from AY_Libs.DisplayLib.handle_manager import (
    DisplayHandle,
    ResourceLifetimeManager,
    HandleGroup,
    open_pil_surface,
    close_surface,
    decode_pil_image,
    LazySurface,
)

__all__ = [
    "DisplayHandle",
    "ResourceLifetimeManager",
    "HandleGroup",
    "open_pil_surface",
    "close_surface",
    "decode_pil_image",
    "LazySurface",
]
