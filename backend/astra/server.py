import uvicorn

from astra.config import settings


def main() -> None:
    uvicorn.run(
        "astra.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.app_env == "development",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
