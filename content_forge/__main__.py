import os

import uvicorn

from content_forge.config import load_settings
from content_forge.logging_config import configure_logging
from content_forge.main import create_app


def main() -> None:
    # Logging goes first so the missing-key warning from load_settings is JSON too.
    configure_logging(os.getenv("LOG_LEVEL") or "INFO")
    settings = load_settings()
    app = create_app(settings)
    # log_config=None keeps uvicorn from replacing the handlers set above.
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
