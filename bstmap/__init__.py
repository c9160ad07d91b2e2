from .indexing import DuplicateKeyError, DuplicatePolicy, InvalidKeyType, OrderedMap

__version__ = "0.1.0"

__all__ = [
    "DuplicateKeyError",
    "DuplicatePolicy",
    "InvalidKeyType",
    "OrderedMap",
]
