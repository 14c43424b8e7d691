"""
Test suite for dependency injection providers.

System role: Verification of DI container
"""

from unittest.mock import MagicMock

from docchat.api.deps import get_chat_service, get_rag_application
from docchat.application.services.chat_service import ChatService


class TestDependencies:
    """Test suite for API dependency factories."""

    def test_get_rag_application_should_read_app_state(self) -> None:
        """Test the container is taken from app.state."""
        # Arrange
        request = MagicMock()

        # Act
        application = get_rag_application(request)

        # Assert
        assert application is request.app.state.rag_application

    def test_get_chat_service_should_wrap_application(self) -> None:
        """Test ChatService is bound to the injected container."""
        # Arrange
        application = MagicMock()

        # Act
        service = get_chat_service(application)

        # Assert
        assert isinstance(service, ChatService)
        assert service.application is application
