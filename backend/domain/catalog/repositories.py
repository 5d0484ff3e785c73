"""
Catalog Domain - Repository Interfaces (Ports).

These are abstract interfaces that define how the domain interacts with persistence.
The actual implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from .entities import Vendor


class VendorRepository(ABC):
    """Repository interface for shared vendors."""

    @abstractmethod
    def get_by_id(self, vendor_id: UUID) -> Optional[Vendor]:
        """Get vendor by ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[Vendor]:
        """Get all vendors in insertion order."""
        pass

    @abstractmethod
    def save(self, vendor: Vendor) -> Vendor:
        """Save (create or update) a vendor."""
        pass

    @abstractmethod
    def delete(self, vendor_id: UUID) -> bool:
        """Delete vendor. Returns False when it did not exist."""
        pass
