"""
Shared utilities for Vitae.

Common functionality used across contexts:
- Logging setup
- Durable local state
- Résumé record persistence
- LLM provider access
- Timestamps and PDF inspection
"""

from vitae.utils.timestamp import format_timestamp, now_exact

__all__ = ["format_timestamp", "now_exact"]
