"""
Catalog Domain - Entities.

Vendors and furniture catalogue pieces.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Optional
from uuid import UUID

from domain.shared.base_entity import VersionedEntity
from domain.shared.exceptions import ValidationException


UNASSIGNED_VENDOR = "Unassigned"


@dataclass(eq=False)
class Vendor(VersionedEntity):
    """
    Vendor entity - a company that supplies materials.

    Vendors are shared between projects and only referenced by id from
    materials; deleting a vendor never touches the materials pointing at it.
    """

    name: str = ""
    contact: str = ""
    address: str = ""

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValidationException("Vendor name is required", "name")


def resolve_vendor_name(
    vendor_id: Optional[UUID],
    vendors: Dict[UUID, Vendor] | Iterable[Vendor],
) -> str:
    """
    Resolve a vendor reference to a display name.

    Missing and dangling references both resolve to "Unassigned"; this
    lookup never raises.
    """
    if vendor_id is None:
        return UNASSIGNED_VENDOR
    if isinstance(vendors, dict):
        vendor = vendors.get(vendor_id)
    else:
        vendor = next((v for v in vendors if v.id == vendor_id), None)
    return vendor.name if vendor else UNASSIGNED_VENDOR


@dataclass(frozen=True)
class FurniturePiece:
    """A piece offered by the layout editor, sized in grid cells."""

    type: str
    label: str
    w: int
    h: int


FURNITURE_CATALOG: Dict[str, FurniturePiece] = {
    piece.type: piece
    for piece in (
        FurniturePiece("sofa", "Sofa", 4, 2),
        FurniturePiece("loveseat", "Loveseat", 3, 2),
        FurniturePiece("chair", "Chair", 1, 1),
        FurniturePiece("table", "Coffee Table", 2, 2),
        FurniturePiece("tv", "TV Stand", 3, 1),
        FurniturePiece("bed", "Bed", 4, 4),
        FurniturePiece("dresser", "Dresser", 3, 1),
        FurniturePiece("desk", "Desk", 3, 1),
    )
}


def get_furniture_piece(piece_type: str) -> FurniturePiece:
    """Look up a catalogue piece by its type key."""
    piece = FURNITURE_CATALOG.get(piece_type)
    if piece is None:
        raise ValidationException(
            f"Unknown furniture type '{piece_type}'", "type", piece_type
        )
    return piece
