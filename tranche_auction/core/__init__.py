"""
Core domain models, exact decimal primitives, contracts and error taxonomy.

This module contains the foundational building blocks that are independent
of the ledger, settlement chain and bid collection.
"""
