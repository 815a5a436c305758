from .owner import OwnerType
from .pet import PetType

__all__ = ["OwnerType", "PetType"]
