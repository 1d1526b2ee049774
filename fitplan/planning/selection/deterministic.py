"""Deterministic Selector.

Seeded, hash-based ranking over a catalog. Behaves like a shuffle, but the
same (seed, id, name) inputs always produce the same order on every host.
No randomness, no state.
"""

from typing import Protocol, TypeVar

from fitplan.utils.text_utils import normalize_name

FNV_OFFSET_BASIS_32 = 0x811C9DC5
FNV_PRIME_32 = 0x01000193
_MASK_32 = 0xFFFFFFFF


class Rankable(Protocol):
    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...


T = TypeVar("T", bound=Rankable)


def fnv1a_32(data: bytes) -> int:
    """32-bit FNV-1a hash."""
    value = FNV_OFFSET_BASIS_32
    for byte in data:
        value ^= byte
        value = (value * FNV_PRIME_32) & _MASK_32
    return value


def selection_hash(seed: str, item_id: str, name: str) -> int:
    """Hash key for one catalog item under a seed.

    Args:
        seed: Selection seed (e.g., a day focus label)
        item_id: Catalog id
        name: Display name (normalized before hashing)

    Returns:
        Unsigned 32-bit hash of "seed:id:normalizedName"
    """
    key = f"{seed}:{item_id}:{normalize_name(name)}"
    return fnv1a_32(key.encode("utf-8"))


def rank(catalog: list[T], seed: str) -> list[T]:
    """Order catalog items by seeded hash, ties broken by id.

    Args:
        catalog: Items exposing `id` and `name`
        seed: Selection seed

    Returns:
        New list with a strict total order over the items
    """
    return sorted(catalog, key=lambda item: (selection_hash(seed, item.id, item.name), item.id))
