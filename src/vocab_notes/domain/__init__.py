"""Domain layer: word normalization and note reconciliation.

Everything in this package is pure and synchronous; it performs no I/O.
"""
