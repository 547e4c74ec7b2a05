from __future__ import annotations

"""Logger state machine, file sink and line formatting."""
