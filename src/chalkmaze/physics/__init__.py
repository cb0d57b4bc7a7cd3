from .collision import CollisionWorld

__all__ = ["CollisionWorld"]
