"""
Test suite for Tranche Auction

Contains:
- tests/unit/          : Unit tests for individual modules and full auction runs
"""
