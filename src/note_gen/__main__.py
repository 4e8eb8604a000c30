import uvicorn

from note_gen.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("note_gen.api.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
