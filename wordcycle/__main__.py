import uvicorn

from .config import Settings, load_env


def main() -> None:
    load_env()
    settings = Settings.from_env()
    print(f"Server running at http://localhost:{settings.port}")
    print(f"Endpoint: http://localhost:{settings.port}/get")
    uvicorn.run("wordcycle.main:app", host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
