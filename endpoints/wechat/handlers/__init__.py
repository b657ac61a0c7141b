from .base import MessageHandler

__all__ = ['MessageHandler']
