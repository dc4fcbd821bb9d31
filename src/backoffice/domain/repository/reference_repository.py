"""Abstract repositories for the read-only reference collections."""

from __future__ import annotations

from abc import ABC, abstractmethod

from backoffice.domain.model.reference import Address, Customer, Warehouse


class CustomerRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return every customer."""


class WarehouseRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Warehouse]:
        """Return every warehouse."""


class AddressRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Address]:
        """Return every address."""
