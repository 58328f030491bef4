"""
Shared module containing cross-cutting concerns.

This module contains code that is used across multiple features.
Organized by layer following the vertical module pattern.

Structure:
    shared/
        application/
            reconciliation.py  - Optimistic apply / remote confirm bookkeeping
            services/          - Session (identity) and still image source
        domain/
            errors.py          - Application error taxonomy
        infrastructure/
            persistence/       - BaseRepository pattern

Usage:
    # Errors
    from src.shared.domain.errors import ReorderError, InvalidTimestampError

    # Reconciliation
    from src.shared.application.reconciliation import Reconciler

    # Repository
    from src.shared.infrastructure.persistence import BaseRepository
"""
