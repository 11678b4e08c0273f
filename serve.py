# serve.py
import uvicorn

from app.core.config import get_settings


def main():
    settings = get_settings()
    print(f"Starting {settings.PROJECT_NAME} on port {settings.APP_PORT}...")

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.APP_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
