"""
Annotation state and the locked-background document template.
"""
from .background import (
    BACKGROUND_ID,
    PageSpecs,
    PageSpecsError,
    compose_annotation_svg,
    read_page_specs,
    strip_background,
)
from .tracker import AnnotationTracker

__all__ = [
    "BACKGROUND_ID",
    "PageSpecs",
    "PageSpecsError",
    "compose_annotation_svg",
    "read_page_specs",
    "strip_background",
    "AnnotationTracker",
]
