import uvicorn

from kv_gateway.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "kv_gateway.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
