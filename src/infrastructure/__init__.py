"""
Infrastructure layer - External concerns

This layer contains:
- SQLite database management (schema, transactions)
"""
