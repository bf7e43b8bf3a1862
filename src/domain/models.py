"""Domain models for fetched user records."""

from __future__ import annotations

from dataclasses import dataclass

from config import settings


@dataclass(frozen=True, slots=True)
class Address:
    city: str
    zipcode: str

    @property
    def display(self) -> str:
        return f"{self.city}, {self.zipcode}"


@dataclass(frozen=True, slots=True)
class Company:
    name: str


@dataclass(frozen=True, slots=True)
class UserRecord:
    id: int
    name: str
    username: str
    email: str
    phone: str
    website: str  # hostname without scheme
    address: Address
    company: Company

    @property
    def mailto_url(self) -> str:
        return f"mailto:{self.email}"

    @property
    def website_url(self) -> str:
        return f"{settings.WEBSITE_SCHEME}://{self.website}"
