"""Customer Repository Interface

Read access to customer records for display on sales documents.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.customer import Customer


class CustomerRepository(ABC):
    """Repository interface for Customer lookups"""

    @abstractmethod
    async def get_by_id(self, tenant_id: str, customer_id: int) -> Optional[Customer]:
        """
        Retrieve a customer of the tenant by ID

        Returns:
            Customer if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        """Create a new customer"""
        pass
