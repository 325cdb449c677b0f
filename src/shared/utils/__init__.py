"""Shared utilities."""

from src.shared.utils.object_id import is_valid_object_id, new_object_id

__all__ = ["is_valid_object_id", "new_object_id"]
