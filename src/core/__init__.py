"""
Core domain models and numeric primitives.

This module contains the foundational building blocks of the production engine
that are independent of any integration (asset loading, UI, persistence).
"""
