import os
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

# Setup logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


class MCPResponse(JSONResponse):
    """
    Standard response envelope for API endpoints.
    """
    def __init__(self, data: Any = None, message: str = "success", status: str = "ok", **kwargs):
        content = {
            "status": status,
            "message": message,
            "data": data,
        }
        super().__init__(content=content, **kwargs)


class BaseService:
    """
    Base class for the service layer. Provides:
    - Structured event/error logging
    - Standard response envelope
    """
    def __init__(self, service_name: str = "authservice"):
        self.service_name = service_name
        self.logger = logging.getLogger(service_name)

    def envelope(self, data: Any = None, message: str = "success", status: str = "ok") -> Dict[str, Any]:
        """Build the standard envelope as a plain dict (for response_model routes)."""
        return {
            "status": status,
            "message": message,
            "data": data,
        }

    def mcp_response(self, data: Any = None, message: str = "success", status: str = "ok", **kwargs):
        """
        Return the standard envelope as a JSON response.
        """
        return MCPResponse(data=data, message=message, status=status, **kwargs)

    def log_event(self, event: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": self.service_name,
            "event": event,
            "data": details or {},
        }
        self.logger.info(f"EVENT: {json.dumps(log_data, default=str)}")
        return log_data

    def log_error(self, error: Exception, context: str = "") -> Dict[str, Any]:
        error_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": self.service_name,
            "error": str(error),
            "error_type": error.__class__.__name__,
            "context": context or "unknown",
        }
        self.logger.error(f"ERROR: {json.dumps(error_data, default=str)}")
        return error_data


# Shared instance used by routers and middleware
base_service = BaseService()
