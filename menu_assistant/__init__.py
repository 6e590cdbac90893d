"""
Restaurant ordering assistant backend.

Responsibilities:
- Serve menu rows from the relational ``menu`` table.
- Forward user prompts plus menu context to the Gemini completion API.
- Reconcile model output back onto known menu items.
"""
