"""
Recommendation layer.

Responsibilities:
- Cache completions by verbatim prompt text with a fixed TTL.
- Reconcile completion text against the menu (by bold names or by JSON ids).
"""
