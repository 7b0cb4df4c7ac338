"""Hive pieces, hands, moves and hex positions, with self-play frame buffers, metrics and numpy networks."""

__version__ = "0.1.0"
__all__ = ["frames", "hand", "hypers", "metrics", "model", "model2", "movement", "piece", "position"]