"""
Application layer - Use case orchestration and services

This layer contains:
- Event bus system and domain events
- Service composition (bootstrap)
- The playground session and its hotkeys
"""
