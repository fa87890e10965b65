"""Aspect-preserving fit of a raster into a bounding box."""
from typing import NamedTuple, Tuple


class Box(NamedTuple):
    x: float
    y: float
    width: float
    height: float


class Placement(NamedTuple):
    x: float
    y: float
    width: float
    height: float


def place_image(intrinsic_size: Tuple[float, float], box: Box) -> Placement:
    """Scale down (never up) to fit the box and center on both axes."""
    image_width, image_height = intrinsic_size
    if image_width <= 0 or image_height <= 0:
        return Placement(box.x + box.width / 2, box.y + box.height / 2, 0.0, 0.0)
    scale = min(box.width / image_width, box.height / image_height, 1)
    width = image_width * scale
    height = image_height * scale
    return Placement(
        x=box.x + (box.width - width) / 2,
        y=box.y + (box.height - height) / 2,
        width=width,
        height=height,
    )


__all__ = ['Box', 'Placement', 'place_image']
