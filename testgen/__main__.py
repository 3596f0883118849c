"""
Allow running as: python -m testgen
"""
import uvicorn

from testgen.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "testgen.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        workers=1,
    )


if __name__ == "__main__":
    main()
