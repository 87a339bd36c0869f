"""Capture region calculation and the capture-once region manager.

The region is measured and stored *before* any UI element that defines it
may be hidden. Everything downstream reads the stored value and never
queries the UI again during a capture.
"""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from ..constants import REGION_SANITY_LIMIT, UI_CHROME_ALLOWANCE, VIEWPORT_PADDING
from ..errors import ValidationError, ValidationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptureRegion:
    """Rectangle of the viewport rendered into output frames (viewport pixels)."""

    left: float
    top: float
    width: float
    height: float
    aspect_ratio: float

    @classmethod
    def from_box(cls, left: float, top: float, width: float, height: float) -> "CaptureRegion":
        aspect_ratio = width / height if height else 0.0
        return cls(left=left, top=top, width=width, height=height, aspect_ratio=aspect_ratio)


@dataclass(frozen=True)
class ElementBox:
    """Measured bounding box of a UI element, in viewport pixels."""

    left: float
    top: float
    width: float
    height: float
    visible: bool = True


@dataclass(frozen=True)
class CropRegion:
    """Offset and size of a capture region inside another element."""

    crop_x: float
    crop_y: float
    width: float
    height: float


class ElementLocator(Protocol):
    """Looks up live UI elements by selector."""

    def query_selector(self, selector: str) -> ElementBox | None: ...


def calculate_region(aspect_ratio: float, viewport_width: float, viewport_height: float) -> CaptureRegion:
    """
    Fit the largest centered rectangle of ``aspect_ratio`` into the viewport.

    The rectangle may use 90% of the viewport width and 90% of its height
    minus the UI chrome allowance. Width-constrained sizing is tried first and
    replaced by height-constrained sizing when it would exceed the height limit.

    Raises:
        ValidationError: If the aspect ratio is not a positive number, or the
            viewport is too small to hold any region
    """
    if not _is_number(aspect_ratio) or not math.isfinite(aspect_ratio) or aspect_ratio <= 0:
        raise ValidationError(f"Aspect ratio must be a positive number, got {aspect_ratio!r}")

    max_width = viewport_width * VIEWPORT_PADDING
    max_height = viewport_height * VIEWPORT_PADDING - UI_CHROME_ALLOWANCE
    if max_width <= 0 or max_height <= 0:
        raise ValidationError(
            f"Viewport {viewport_width}x{viewport_height} is too small for a capture region"
        )

    width = max_width
    height = width / aspect_ratio
    if height > max_height:
        height = max_height
        width = height * aspect_ratio

    return CaptureRegion(
        left=(viewport_width - width) / 2,
        top=(viewport_height - height) / 2,
        width=width,
        height=height,
        aspect_ratio=aspect_ratio,
    )


def capture_from_live_element(
    locator: ElementLocator | None,
    selector: str,
    fallback_aspect_ratio: float,
    viewport_width: float,
    viewport_height: float,
) -> CaptureRegion:
    """
    Measure the element matching ``selector``, or calculate a region instead.

    Must be called, and its result stored, before anything hides or removes
    the element.
    """
    box = locator.query_selector(selector) if locator is not None else None
    if box is not None and box.visible and box.width > 0 and box.height > 0:
        return CaptureRegion.from_box(box.left, box.top, box.width, box.height)

    logger.debug("No visible element for %r; calculating capture region", selector)
    return calculate_region(fallback_aspect_ratio, viewport_width, viewport_height)


def calculate_crop_region(region: CaptureRegion, element: ElementBox) -> CropRegion:
    """Locate ``region`` inside ``element``'s bounding box."""
    return CropRegion(
        crop_x=region.left - element.left,
        crop_y=region.top - element.top,
        width=region.width,
        height=region.height,
    )


def validate_region(region: CaptureRegion | None) -> ValidationResult:
    """Check a region against the sanity rules, reporting every violation."""
    if region is None:
        return ValidationResult(("Region is missing",))

    values = (region.left, region.top, region.width, region.height)
    if not all(_is_number(v) and math.isfinite(v) for v in values):
        return ValidationResult((f"Region has non-numeric values: {values!r}",))

    errors: list[str] = []
    if region.width <= 0 or region.height <= 0:
        errors.append(f"Invalid dimensions: {region.width}x{region.height}")
    if region.left < 0 or region.top < 0:
        errors.append(
            f"Region positioned outside viewport: left={region.left}, top={region.top}"
        )
    if region.left > REGION_SANITY_LIMIT or region.top > REGION_SANITY_LIMIT:
        errors.append(
            f"Region position beyond {REGION_SANITY_LIMIT}px: left={region.left}, top={region.top}"
        )
    if region.width > REGION_SANITY_LIMIT or region.height > REGION_SANITY_LIMIT:
        errors.append(f"Region too large: {region.width}x{region.height}")
    return ValidationResult(tuple(errors))


class CaptureRegionManager:
    """Holds one capture region: capture once, read many times."""

    def __init__(self) -> None:
        self._region: CaptureRegion | None = None

    def capture(
        self,
        locator: ElementLocator | None,
        selector: str,
        fallback_aspect_ratio: float,
        viewport_width: float,
        viewport_height: float,
    ) -> CaptureRegion:
        """Measure (or calculate) the region now and store it. Call before hiding the UI."""
        region = capture_from_live_element(
            locator, selector, fallback_aspect_ratio, viewport_width, viewport_height
        )
        return self.store(region)

    def calculate_and_store(
        self, aspect_ratio: float, viewport_width: float, viewport_height: float
    ) -> CaptureRegion:
        """Store a calculated region without consulting any UI element."""
        return self.store(calculate_region(aspect_ratio, viewport_width, viewport_height))

    def store(self, region: CaptureRegion) -> CaptureRegion:
        """
        Store ``region`` after validating it.

        Raises:
            ValidationError: If the region breaks any sanity rule; nothing is stored
        """
        validate_region(region).raise_for_errors()
        self._region = region
        logger.debug("Stored capture region %s", region)
        return region

    def get_region(self) -> CaptureRegion | None:
        return self._region

    def has_region(self) -> bool:
        return self._region is not None

    def get_crop_region(self, element: ElementBox) -> CropRegion | None:
        if self._region is None:
            return None
        return calculate_crop_region(self._region, element)

    def clear(self) -> None:
        self._region = None


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
