"""SQLAlchemy ORM models for the Reliva API."""
