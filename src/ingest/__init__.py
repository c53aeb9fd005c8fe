"""Manifest ingestion pipeline.

This package reads labeled list files, orders and encodes their records,
and drives batched writes into the store layer.
"""
