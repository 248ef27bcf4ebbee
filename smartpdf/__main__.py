"""Convenience entrypoint: python -m smartpdf"""

import uvicorn

from smartpdf.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("smartpdf.main:app", host=settings.host, port=settings.port, reload=False)


if __name__ == "__main__":
    main()
