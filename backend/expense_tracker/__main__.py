# expense_tracker/__main__.py — `python -m expense_tracker` runs the server
import logging

import uvicorn

from expense_tracker.core.config import settings


def main() -> None:
    logging.basicConfig(level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO))
    uvicorn.run(
        "expense_tracker.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=str(settings.LOG_LEVEL).lower(),
    )


if __name__ == "__main__":
    main()
