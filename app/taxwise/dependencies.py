"""
FastAPI dependencies that hand the route layer its adapters.

Adapters are created in the application lifespan and stored on ``app.state``.
A request that arrives while they are missing is refused with
ServiceNotReadyError instead of reaching the merge or the model.
"""

from fastapi import Request

from .services.ai import AIService
from .services.pdf_service import PDFMergerService
from .services.storage import TempStorage

NOT_READY_MESSAGE = "Modules not loaded yet. Try again later."


class ServiceNotReadyError(Exception):
    """Raised when a request needs an adapter that is not initialized."""

    def __init__(self, component: str):
        super().__init__(f"{component} is not initialized")
        self.component = component


def _from_state(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise ServiceNotReadyError(name)
    return service


def require_storage(request: Request) -> TempStorage:
    return _from_state(request, "storage")


def require_pdf_merger(request: Request) -> PDFMergerService:
    return _from_state(request, "pdf_merger")


def require_ai_service(request: Request) -> AIService:
    return _from_state(request, "ai_service")
