from __future__ import annotations

"""Filesystem naming helpers and the standard logging bridge."""
