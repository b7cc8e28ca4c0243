"""capsearch — Capability-aware search execution over heterogeneous backends."""

__version__ = "0.1.0"
