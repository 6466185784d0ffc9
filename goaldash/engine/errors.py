"""Engine error taxonomy.

Only registry setup is fatal. Metric degeneracy and unknown categories are
reported as EngineWarning codes on the LayoutDescriptor instead.
"""

from __future__ import annotations

DEGENERATE_INPUT = "degenerate_input"
UNKNOWN_CATEGORY_FALLBACK = "unknown_category_fallback"


class RegistryMisconfiguration(RuntimeError):
    """Widget registry failed validation while being built."""
