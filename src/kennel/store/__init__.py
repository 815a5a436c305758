"""Relational store for owners and pets.

Main components:
- RelationalStore: Abstract lookup/scan/insert contract used by resolvers
- InMemoryStore: Lock-guarded list-backed implementation
- IdStrategy: Pluggable identifier assignment for inserts
"""

from .base import RelationalStore, StoreException
from .factory import create_store
from .ids import CountPlusOneIds, IdStrategy, SequenceIds, get_id_strategy
from .memory import InMemoryStore
from .models import Collection, Entity, Owner, Pet
from .seed_data import SEED_OWNERS, SEED_PETS, seed_store

__all__ = [
    # Base classes and exceptions
    "RelationalStore",
    "StoreException",
    "InMemoryStore",
    # Entities
    "Collection",
    "Entity",
    "Owner",
    "Pet",
    # Identifier strategies
    "IdStrategy",
    "CountPlusOneIds",
    "SequenceIds",
    "get_id_strategy",
    # Construction
    "create_store",
    "seed_store",
    "SEED_OWNERS",
    "SEED_PETS",
]
