import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from storyline import storage
from storyline.routes import router

load_dotenv(Path(__file__).parent.parent / ".env")

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


def create_app(data_dir: Path | None = None, presets_dir: Path | None = None) -> FastAPI:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    resolved = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    if presets_dir is None and os.getenv("PRESETS_DIR"):
        presets_dir = Path(os.environ["PRESETS_DIR"])
    storage.init_storage(resolved, presets_dir=presets_dir)

    app = FastAPI(title="Storyline")
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()
