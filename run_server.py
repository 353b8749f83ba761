import os

import uvicorn

from pawcheck.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="pawcheck-server")
    logger.info(f"Cache file: {settings.cache_path}")

    uvicorn.run(
        "pawcheck.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
