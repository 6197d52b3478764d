"""
SVG template that locks a page's source image beneath the user's drawing layer.

Only three attributes of the source SVG's root element are read; the rest of
the document is never parsed.
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import BinaryIO, Union
from xml.sax.saxutils import quoteattr

BACKGROUND_ID = "src-bg"

# Matches the locked background element written by compose_annotation_svg,
# wherever the editor moved its id attribute to within the tag.
BACKGROUND_PATTERN = re.compile(rb'<image[^>]*id="' + BACKGROUND_ID.encode() + rb'"[^>]*>')

# Unit suffixes dropped from width/height for the image's user-space size
_UNIT_CHARS = "x%npiemtc"

ANNOTATION_TEMPLATE = """<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<svg
   width={width}
   height={height}
   viewBox={view_box}
   version="1.1"
   xmlns:xlink="http://www.w3.org/1999/xlink"
   xmlns="http://www.w3.org/2000/svg"
   xmlns:sodipodi="http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd"
   xmlns:inkscape="http://www.inkscape.org/namespaces/inkscape"
   xmlns:svg="http://www.w3.org/2000/svg">
  <g
     inkscape:label="Layer 1"
     inkscape:groupmode="layer"
     id="layer1">
    <image
       id="{background_id}"
       preserveAspectRatio="none"
       width={image_width}
       height={image_height}
       style="image-rendering:optimizeQuality"
       xlink:href={href}
       sodipodi:insensitive="true"
       inkscape:svg-dpi="{dpi}"
       x="0"
       y="0" />
  </g>
</svg>
"""


class PageSpecsError(ValueError):
    """The source SVG's root element could not be read."""


@dataclass(frozen=True)
class PageSpecs:
    """Size attributes copied from a source page's root element."""

    width: str
    height: str
    view_box: str


def strip_unit(value: str) -> str:
    """Drop a trailing CSS unit such as "pt", "mm" or "%" from a length."""
    return value.rstrip(_UNIT_CHARS)


def read_page_specs(source: Union[str, BinaryIO]) -> PageSpecs:
    """
    Read width, height and viewBox from the root element of an SVG.

    Parsing stops at the first start tag.

    Args:
        source: Path or binary file object of the SVG

    Raises:
        PageSpecsError: If the document is malformed or lacks width/height
    """
    try:
        for _, element in ET.iterparse(source, events=("start",)):
            attrs = element.attrib
            break
        else:
            raise PageSpecsError("document has no root element")
    except ET.ParseError as e:
        raise PageSpecsError(str(e)) from e

    width = attrs.get("width", "").strip()
    height = attrs.get("height", "").strip()
    if not width or not height:
        raise PageSpecsError("root element has no width/height")

    view_box = attrs.get("viewBox", "").strip()
    if not view_box:
        view_box = f"0 0 {strip_unit(width)} {strip_unit(height)}"

    return PageSpecs(width=width, height=height, view_box=view_box)


def compose_annotation_svg(specs: PageSpecs, href: str, dpi: int = 300) -> bytes:
    """
    Build an annotation document whose only content is the locked background.

    The background references ``href``, sits at the origin, covers the whole
    page, and is marked insensitive so the editor will not select or move it.
    """
    text = ANNOTATION_TEMPLATE.format(
        width=quoteattr(specs.width),
        height=quoteattr(specs.height),
        view_box=quoteattr(specs.view_box),
        background_id=BACKGROUND_ID,
        image_width=quoteattr(strip_unit(specs.width)),
        image_height=quoteattr(strip_unit(specs.height)),
        href=quoteattr(href),
        dpi=dpi,
    )
    return text.encode("utf-8")


def strip_background(document: bytes) -> bytes:
    """Remove the locked background element, leaving everything else verbatim."""
    return BACKGROUND_PATTERN.sub(b"", document)
