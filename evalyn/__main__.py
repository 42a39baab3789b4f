"""Run the web front end: ``python -m evalyn``."""
import uvicorn

from evalyn.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "evalyn.api:create_app",
        factory=True,
        host="127.0.0.1",
        port=8000,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
