"""SQLAlchemy Base class for all models."""

from maintenance_portal.models.base.base_model import Base

# Importing the models package registers every table on Base.metadata
import maintenance_portal.models  # noqa: F401,E402

__all__ = ["Base"]
