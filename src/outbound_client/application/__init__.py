"""Application pipeline stages around the transport."""

from .failures import failure_from_response, failure_from_transport_error
from .request_pipeline import RequestPipeline, RequestPlan
from .response_pipeline import ResponsePipeline
from .session import AlertCooldown, SessionManager

__all__ = [
    "AlertCooldown",
    "RequestPipeline",
    "RequestPlan",
    "ResponsePipeline",
    "SessionManager",
    "failure_from_response",
    "failure_from_transport_error",
]
