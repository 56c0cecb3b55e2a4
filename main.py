"""
Main application entry point.
"""

import logging

from accounts import app
from accounts.core.config import settings
from accounts.core.database import init_db

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    uvicorn.run(app, host="0.0.0.0", port=8000)
