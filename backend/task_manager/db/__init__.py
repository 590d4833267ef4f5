"""Database Package — declarative Base, standalone session factory, seed script.

Design Decisions:
    - Separate from infrastructure/database.py: scripts and migrations need
      engine access without the FastAPI lifespan
"""
