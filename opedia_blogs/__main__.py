"""Run the API with uvicorn: `python -m opedia_blogs`."""

import uvicorn

from opedia_blogs.config import settings


def main() -> None:
    uvicorn.run("opedia_blogs.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
