from app.repositories.canvass.repository import CanvassRepository

__all__ = ["CanvassRepository"]
