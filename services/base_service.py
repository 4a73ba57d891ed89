"""
Base Service Interface

Defines the result wrapper shared by services and the abstract
persistence interface they read and write through.

Implemented by:
- SupabasePersistence (supabase_client.py): hosted Postgres tables
- In-memory fakes in the test suite
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional, Generic, TypeVar
from dataclasses import dataclass


T = TypeVar('T')


@dataclass
class ServiceResult(Generic[T]):
    """Standard service response wrapper"""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(cls, data: T, metadata: Dict[str, Any] = None) -> 'ServiceResult[T]':
        """Create successful result"""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, metadata: Dict[str, Any] = None) -> 'ServiceResult[T]':
        """Create failure result"""
        return cls(success=False, error=error, metadata=metadata)


class IPersistence(ABC):
    """
    Generic table access

    Filters are equality matches: {'user_id': 'u1', 'is_completed': False}.
    """

    @abstractmethod
    def query(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        Select rows

        Args:
            table: Table name
            filters: Column equality filters

        Returns:
            List of row dictionaries (empty when nothing matches)
        """
        pass

    @abstractmethod
    def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored"""
        pass

    @abstractmethod
    def update(self, table: str, record_id: Any, patch: Dict[str, Any]) -> None:
        """Apply a partial update to the row with this id"""
        pass

    @abstractmethod
    def delete(self, table: str, filters: Dict[str, Any]) -> None:
        """Delete rows matching filters"""
        pass

    def is_available(self) -> bool:
        """Check if the backing store is configured"""
        return True
