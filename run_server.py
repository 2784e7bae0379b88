import os

import uvicorn

from trailhead.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="trailhead-insights")
    logger.info("Starting Trailhead Insights", extra={"provider_source": settings.provider_source})

    uvicorn.run(
        "trailhead.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
