"""Record store interface for person records."""
from abc import ABC, abstractmethod
from typing import List

from ..entities.person import PersonRecord


class RecordStore(ABC):
    """Interface for appending and looking up person records."""

    @abstractmethod
    async def insert_record(self, record: PersonRecord) -> None:
        """
        Insert a record unconditionally.

        No existence check is made; indexing the same object twice yields two
        records.

        Raises:
            StoreError: If the write fails
        """
        pass

    @abstractmethod
    async def find_records_by_face_id(self, face_id: str) -> List[PersonRecord]:
        """
        Find every record carrying the given face identifier.

        Args:
            face_id: Face identifier to match

        Returns:
            Matching records in the order the store returned them

        Raises:
            StoreError: If the lookup fails
        """
        pass
