"""
Boundary to the generative edit backend.

The backend is an external collaborator. Ayra only relies on the
EditBackend protocol below; the result of any call may be an ImageResource,
raw encoded bytes, or a 'data:<mime>;base64,...' URL. Anything that does not
decode to an image is an unusable result.
"""

from io import BytesIO
from typing import Any, Protocol, Union

from AY_Libs.errors import BackendFailure
from AY_Libs.ImageEditingLib.image_models import ImageResource
from AY_Libs.ImageEditingLib.image_editing_ops import data_url_to_resource
from AY_Libs.pillow_compat import Image, UnidentifiedImageError

BackendResult = Union[ImageResource, bytes, str]


class EditBackend(Protocol):
    def edit_image(self, image: ImageResource, instruction: str) -> BackendResult:
        ...

    def filter_image(self, image: ImageResource, prompt: str) -> BackendResult:
        ...

    def adjust_image(self, image: ImageResource, prompt: str) -> BackendResult:
        ...

    def remove_background(self, image: ImageResource) -> BackendResult:
        ...


def identify_mime_type(data: bytes) -> str:
    """
    Return the MIME type of encoded image bytes.

    Raises:
        BackendFailure: If Pillow cannot identify the payload as an image
    """
    try:
        with Image.open(BytesIO(data)) as image:
            image_format = image.format
    except (UnidentifiedImageError, OSError) as e:
        raise BackendFailure(f"The edit service returned data that is not an image: {e}")
    return Image.MIME.get(image_format, f"image/{str(image_format).lower()}")


def coerce_result(result: Any, name: str) -> ImageResource:
    """
    Turn a backend result into a fresh ImageResource named `name`.

    Args:
        result: What the backend returned
        name: Name for the new resource

    Returns:
        A new ImageResource

    Raises:
        BackendFailure: If the result is missing, empty, or not an image
    """
    if isinstance(result, ImageResource):
        data = result.data
    elif isinstance(result, (bytes, bytearray)):
        data = bytes(result)
    elif isinstance(result, str):
        data = data_url_to_resource(result, name).data
    elif result is None:
        raise BackendFailure("The edit service did not return an image.")
    else:
        raise BackendFailure(f"The edit service returned an unsupported result: {type(result).__name__}")

    if not data:
        raise BackendFailure("The edit service returned an empty image.")

    return ImageResource(data=data, mime_type=identify_mime_type(data), name=name)
