import uvicorn

from wildchat.config import settings


def main() -> None:
    uvicorn.run(
        "wildchat.main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
