"""Embedded key-value storage layer.

This package wraps LevelDB and LMDB behind one batched write contract
and reopens finished stores for inspection.
"""
