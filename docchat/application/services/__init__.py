"""
Application services module.

Provides business logic services for API handlers.
"""

from docchat.application.services.chat_service import ChatService

__all__ = ["ChatService"]
