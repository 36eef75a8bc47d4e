# portal/main.py
import logging

from fastapi import FastAPI

from .catalog import catalog_router
from .config import get_settings


logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Rick and Morty Portal",
    description=(
        "Read-only catalogue of the characters, locations and episodes "
        "served by the public Rick and Morty API, with filters, "
        "pagination and resolved relations."
    ),
    version="1.0.0",
)

app.include_router(catalog_router)


# Health check
@app.get("/")
def health_check():
    return {"status": "ok", "message": "Rick and Morty portal live"}
