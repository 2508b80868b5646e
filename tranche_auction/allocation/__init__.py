"""Allocation: точное разбиение fungible-баланса под победителей аукциона."""

from .allocator import AllocationResult, AssetAllocator, allocate, verify_conservation

__all__ = [
    "AllocationResult",
    "AssetAllocator",
    "allocate",
    "verify_conservation",
]
