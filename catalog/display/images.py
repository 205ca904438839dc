"""
Image selection for catalog list and detail views.
"""

from typing import Dict, Iterable, List, Optional

from ..records import ImageRecord

DEFAULT_GUITAR_IMAGE = '/images/guitars/guitar-default.jpg'

# Image types shown on guitar cards, as fetched by the guitars list
GUITAR_CARD_IMAGE_TYPES = ('gallery', 'primary', 'body_front', 'headstock')

VARIANT_FIELDS = {
    'thumbnail': 'thumbnail_url',
    'small': 'small_url',
    'medium': 'medium_url',
    'original': 'original_url',
}


def _display_order(image: ImageRecord) -> int:
    return image.display_order if image.display_order is not None else 0


def group_images_by_entity(images: Iterable[ImageRecord]) -> Dict[str, List[ImageRecord]]:
    """Group images per entity id, each group ordered by display order."""
    grouped: Dict[str, List[ImageRecord]] = {}
    for image in images:
        grouped.setdefault(image.entity_id, []).append(image)
    for entity_images in grouped.values():
        entity_images.sort(key=_display_order)
    return grouped


def select_primary_image(images: Iterable[ImageRecord]) -> Optional[ImageRecord]:
    """
    Pick the image to represent an entity.

    An image flagged primary (or of type 'primary') wins; otherwise the
    first image by display order is used.
    """
    ordered = sorted(images, key=_display_order)
    for image in ordered:
        if image.is_primary or image.image_type == 'primary':
            return image
    return ordered[0] if ordered else None


def image_url(image: Optional[ImageRecord], size: str = 'medium',
              default: str = DEFAULT_GUITAR_IMAGE) -> str:
    """
    URL for an image variant, falling back to the original upload.

    Raises:
        ValueError: If size is not a known variant
    """
    if size not in VARIANT_FIELDS:
        raise ValueError(f"Unknown image size '{size}'; expected one of {sorted(VARIANT_FIELDS)}")
    if image is None:
        return default
    return getattr(image, VARIANT_FIELDS[size]) or image.original_url or default
