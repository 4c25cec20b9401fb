"""Persistence for Theo Runner."""

from .best_score import (
    BestScoreStore,
    BestScoreStoreError,
    JsonBestScoreStore,
    MemoryBestScoreStore,
)

__all__ = [
    "BestScoreStore",
    "BestScoreStoreError",
    "JsonBestScoreStore",
    "MemoryBestScoreStore",
]
