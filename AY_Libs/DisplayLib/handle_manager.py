"""
Display handle lifetime management.

A DisplayHandle makes an ImageResource's bytes addressable to a rendering
surface (a decoded PIL image, a QImage, ...). Handles are cheap to create but
must be released explicitly, so every acquisition in Ayra goes through a
ResourceLifetimeManager, either scoped to a `with` block or held by a
HandleGroup that follows the set of resources currently on screen.

Acquiring a handle never inspects the bytes. The default surfaces decode on
first use, so a payload no decoder understands still gets a handle and only
fails where its pixels are actually needed.

Classes:
    LazySurface: Decodes a resource on first access and closes what it decoded
    DisplayHandle: A live reference from a resource to its rendering surface
    ResourceLifetimeManager: Issues and revokes handles, counting both
    HandleGroup: Keeps exactly one handle per presented resource across re-renders

Functions:
    decode_pil_image: Decode a resource with Pillow
    open_pil_surface: Default surface factory (lazy Pillow decode)
    close_surface: Default surface disposer
"""

from contextlib import contextmanager
from dataclasses import dataclass
from itertools import count
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Iterator, List, Optional
import logging

from AY_Libs.errors import RenderUnavailable
from AY_Libs.pillow_compat import DecompressionBombError, UnidentifiedImageError

if TYPE_CHECKING:
    from AY_Libs.ImageEditingLib.image_models import ImageResource

logger = logging.getLogger(__name__)

SurfaceFactory = Callable[["ImageResource"], Any]
SurfaceDisposer = Callable[[Any], None]
Decoder = Callable[["ImageResource"], Any]


class LazySurface:
    """
    Rendering surface that decodes its resource on first access.

    Example:
        >>> surface = LazySurface(resource, decode_pil_image)
        >>> surface.is_decoded
        False
        >>> surface.image.size
        (40, 20)
        >>> surface.close()
    """

    def __init__(self, resource: "ImageResource", decoder: Decoder):
        self.resource = resource
        self._decoder = decoder
        self._image: Any = None
        self.closed = False

    @property
    def is_decoded(self) -> bool:
        return self._image is not None

    @property
    def image(self) -> Any:
        """
        The decoded image.

        Raises:
            RenderUnavailable: If the surface was closed or the bytes cannot be decoded
        """
        if self.closed:
            raise RenderUnavailable(f"{self.resource.name} is no longer presented.")
        if self._image is None:
            self._image = self._decoder(self.resource)
        return self._image

    def close(self) -> None:
        self.closed = True
        image, self._image = self._image, None
        if image is not None:
            close = getattr(image, "close", None)
            if close is not None:
                close()


def decode_pil_image(resource: "ImageResource") -> Any:
    try:
        return resource.open_image()
    except (UnidentifiedImageError, DecompressionBombError) as e:
        raise RenderUnavailable(f"Could not decode {resource.name} for display.") from e


def open_pil_surface(resource: "ImageResource") -> LazySurface:
    return LazySurface(resource, decode_pil_image)


def close_surface(surface: Any) -> None:
    close = getattr(surface, "close", None)
    if close is not None:
        close()


@dataclass(frozen=True, eq=False)
class DisplayHandle:
    """A live reference from a resource to its rendering surface.

    Attributes:
        handle_id: Process-local identifier (e.g. 'handle:7')
        resource: The resource this handle presents
        surface: Whatever the manager's factory produced for the resource
    """
    handle_id: str
    resource: "ImageResource"
    surface: Any


class ResourceLifetimeManager:
    """
    Issues and revokes display handles.

    Every `acquire` must be paired with one `release`. Releasing a handle that
    is already released, was issued by another manager, or is None does
    nothing, so teardown code can release unconditionally.

    Example:
        >>> manager = ResourceLifetimeManager()
        >>> with manager.scoped(resource) as handle:
        ...     handle.surface.image.size
        >>> manager.live_count
        0
    """

    def __init__(
        self,
        factory: Optional[SurfaceFactory] = None,
        disposer: Optional[SurfaceDisposer] = None,
    ):
        self._factory = factory or open_pil_surface
        self._disposer = disposer or close_surface
        self._live: Dict[str, DisplayHandle] = {}
        self._ids = count(1)
        self.acquired_count = 0
        self.released_count = 0

    @property
    def live_count(self) -> int:
        return len(self._live)

    def live_handles(self) -> List[DisplayHandle]:
        return list(self._live.values())

    def is_live(self, handle: Optional[DisplayHandle]) -> bool:
        return handle is not None and self._live.get(handle.handle_id) is handle

    def acquire(self, resource: "ImageResource") -> DisplayHandle:
        """
        Create a handle for a resource.

        Args:
            resource: The resource to make addressable

        Returns:
            A new live DisplayHandle

        Raises:
            Whatever the surface factory raises; no handle is registered then
        """
        surface = self._factory(resource)
        handle = DisplayHandle(handle_id=f"handle:{next(self._ids)}", resource=resource, surface=surface)
        self._live[handle.handle_id] = handle
        self.acquired_count += 1
        logger.debug(f"Acquired {handle.handle_id} for {resource.name}")
        return handle

    def release(self, handle: Optional[DisplayHandle]) -> None:
        """Revoke a handle. Unknown or already released handles are ignored."""
        if not self.is_live(handle):
            return

        del self._live[handle.handle_id]
        self.released_count += 1
        logger.debug(f"Released {handle.handle_id} for {handle.resource.name}")
        self._disposer(handle.surface)

    def release_many(self, handles: Iterable[Optional[DisplayHandle]]) -> None:
        """Release every handle, even if disposing one of them fails."""
        first_error: Optional[BaseException] = None
        for handle in list(handles):
            try:
                self.release(handle)
            except Exception as e:
                logger.warning(f"Disposing {handle.handle_id} failed: {e}")
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def release_all(self) -> None:
        self.release_many(self._live.values())

    @contextmanager
    def scoped(self, resource: "ImageResource") -> Iterator[DisplayHandle]:
        handle = self.acquire(resource)
        try:
            yield handle
        finally:
            self.release(handle)


class HandleGroup:
    """
    Holds one live handle per presented resource.

    The presentation layer calls `reconcile` with the full list of resources it
    is about to show. Resources already held keep their handle, new ones are
    acquired, and handles for resources that dropped out are released only
    after the complete new set exists, so nothing still on screen is ever left
    without a handle.
    """

    def __init__(self, manager: ResourceLifetimeManager, name: str = "display"):
        self.manager = manager
        self.name = name
        self._handles: List[DisplayHandle] = []

    @property
    def handles(self) -> List[DisplayHandle]:
        return list(self._handles)

    def handle_for(self, resource: Optional["ImageResource"]) -> Optional[DisplayHandle]:
        if resource is None:
            return None
        for handle in self._handles:
            if handle.resource is resource:
                return handle
        return None

    def reconcile(self, resources: Iterable[Optional["ImageResource"]]) -> List[DisplayHandle]:
        """
        Make the held handles match a new resource set.

        Args:
            resources: Resources to present, in display order. None entries are
                skipped and repeated resources share one handle.

        Returns:
            The handles now held, one per distinct resource, in display order

        Raises:
            Whatever acquisition raises. Handles acquired during this call are
            released first and the previous set is kept.
        """
        previous = {id(handle.resource): handle for handle in self._handles}
        new_handles: List[DisplayHandle] = []
        fresh: List[DisplayHandle] = []
        seen = set()

        try:
            for resource in resources:
                if resource is None or id(resource) in seen:
                    continue
                seen.add(id(resource))
                handle = previous.get(id(resource))
                if handle is None:
                    handle = self.manager.acquire(resource)
                    fresh.append(handle)
                new_handles.append(handle)
        except Exception:
            self.manager.release_many(fresh)
            raise

        dropped = [handle for key, handle in previous.items() if key not in seen]
        self._handles = new_handles
        if fresh or dropped:
            logger.debug(
                f"Handle group '{self.name}': {len(fresh)} acquired, "
                f"{len(dropped)} released, {len(new_handles)} live"
            )
        self.manager.release_many(dropped)
        return list(new_handles)

    def close(self) -> None:
        handles, self._handles = self._handles, []
        self.manager.release_many(handles)

    def __enter__(self) -> "HandleGroup":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
