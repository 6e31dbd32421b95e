"""
Test suite for the arbitrary-precision arithmetic layer

Contains:
- tests/unit/          : Unit tests for helpers, backends and the adapter
"""
