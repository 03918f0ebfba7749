"""
Test suite for Resgen

Contains:
- tests/unit/          : Unit tests for numeric policies, generator models and the engine
"""
