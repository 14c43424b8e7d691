"""
Dependency injection providers.

Factory functions for FastAPI dependencies. The RAG container is built once
in the application lifespan and stored on app.state.

Dependencies: fastapi, docchat.application
System role: DI container for service injection
"""

from fastapi import Depends, Request

from docchat.application.rag_application import RAGApplication
from docchat.application.services.chat_service import ChatService


def get_rag_application(request: Request) -> RAGApplication:
    """
    Get the app-scoped RAG container.

    Args:
        request: Incoming request (gives access to app.state)

    Returns:
        RAGApplication: Shared container created at startup
    """
    return request.app.state.rag_application


def get_chat_service(application: RAGApplication = Depends(get_rag_application)) -> ChatService:
    """
    Get chat service bound to the shared container.

    Args:
        application: RAG container (injected via Depends)

    Returns:
        ChatService: Chat service instance
    """
    return ChatService(application=application)
