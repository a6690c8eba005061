"""Import all models here so metadata.create_all sees every table."""

from reliva.db.base_class import Base
from reliva.models import document  # noqa: F401

__all__ = ["Base"]
