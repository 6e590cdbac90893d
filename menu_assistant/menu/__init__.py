"""
Menu store package.

Responsibilities:
- Describe the ``MenuItem`` row shape.
- Read menu rows from the relational ``menu`` table with bound-parameter queries.
"""
