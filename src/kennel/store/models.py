"""
Entity records held by the relational store
"""

from dataclasses import dataclass
from enum import Enum


class Collection(Enum):
    """Entity collections known to the store."""

    OWNERS = "owners"
    PETS = "pets"


@dataclass(frozen=True)
class Owner:
    """An owner of zero or more pets."""

    id: int
    name: str


@dataclass(frozen=True)
class Pet:
    """A pet; ``owner_id`` is not checked against the owners collection."""

    id: int
    name: str
    owner_id: int


Entity = Owner | Pet
