import uvicorn

from hrfleet.config import settings
from hrfleet.utils.logger import configure_logging


def main() -> None:
    configure_logging()
    uvicorn.run(
        "hrfleet.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
