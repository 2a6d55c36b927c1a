"""Main application entry point."""

from meritbadge.config.environment import IS_PRODUCTION_ENVIRONMENT
from meritbadge.api.app import app

if __name__ == "__main__":
    import uvicorn

    if not IS_PRODUCTION_ENVIRONMENT:
        # Development mode - import string so reload can restart the app
        uvicorn.run(
            "meritbadge.api.app:app",
            host="0.0.0.0",
            port=8000,
            reload=True,
            log_level="debug"
        )
    else:
        # Production mode - use string reference for proper multi-worker support
        uvicorn.run(
            "meritbadge.api.app:app",
            host="0.0.0.0",
            port=8000,
            reload=False,
            workers=4,
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )
