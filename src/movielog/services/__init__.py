"""Service layer for external API integrations."""

from .contentful import ContentfulService
from .omdb import OMDbService

__all__ = ["ContentfulService", "OMDbService"]
