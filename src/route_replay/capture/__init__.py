"""Capture region calculation and storage."""

from .region import (
    CaptureRegion,
    CaptureRegionManager,
    CropRegion,
    ElementBox,
    ElementLocator,
    calculate_crop_region,
    calculate_region,
    capture_from_live_element,
    validate_region,
)

__all__ = [
    "CaptureRegion",
    "CaptureRegionManager",
    "CropRegion",
    "ElementBox",
    "ElementLocator",
    "calculate_crop_region",
    "calculate_region",
    "capture_from_live_element",
    "validate_region",
]
