"""In-memory gallery and map projections."""

from .synchronizer import ViewSynchronizer, build_projection

__all__ = ["ViewSynchronizer", "build_projection"]
