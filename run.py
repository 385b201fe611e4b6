#!/usr/bin/env python3
"""
Run script for the Auth API.
This script launches the FastAPI server with the auth and protected routers mounted.
"""
import uvicorn
import sys
import traceback

from authservice.config import ConfigError, load_settings

if __name__ == "__main__":
    try:
        settings = load_settings()

        print("Starting Auth API server...")
        print(f"Server is serving on http://localhost:{settings.port}/swagger-ui")

        uvicorn.run(
            "authservice.main:app",
            host=settings.host,
            port=settings.port,
            reload=not settings.is_production,
            log_level="info"
        )
    except ConfigError as e:
        print(f"Invalid configuration: {e}")
        sys.exit(2)
    except Exception as e:
        print(f"Error starting server: {e}")
        traceback.print_exc()
        sys.exit(1)
