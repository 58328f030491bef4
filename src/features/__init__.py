"""
Features module - Vertical Feature Organization

Each feature module contains all related code organized by layer:
- domain/: Entities, value objects, repository interfaces
- application/: Stores, controllers, pure helpers
- infrastructure/: Repository implementations, external integrations

Features:
- projects/: Projects and their owners
- scenes/: Ordered scene cards and the scene store
- keyframes/: Timestamped markers on the audio timeline
- playback/: Transport state of the audio track
"""
