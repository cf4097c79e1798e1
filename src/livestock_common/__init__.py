"""Shared domain models, stores and security primitives for the livestock marketplace."""
