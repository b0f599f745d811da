"""Run the API with uvicorn: python -m pushrelay"""

import uvicorn

from pushrelay.core.config import settings


def main() -> None:
    uvicorn.run(
        "pushrelay.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
