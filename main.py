# main.py

from uvicorn import run

from app.configs import settings


def main() -> None:
    run(
        "app.main:app",
        host="0.0.0.0",  # noqa: S104
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.ENVIRONMENT == "development",
    )


if __name__ == "__main__":
    main()
