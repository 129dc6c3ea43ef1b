"""Run the API server: python -m aptix"""
import uvicorn

from aptix.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "aptix.api.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development(),
    )


if __name__ == "__main__":
    main()
