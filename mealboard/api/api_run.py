from fastapi import FastAPI
import logging

from mealboard.api.routes import export
from mealboard.utilities import config

# Logging
logger = logging.getLogger("mealboard_app")

# Initialize FastAPI app
app = FastAPI(title="Mealboard Dashboard Export API", debug=config.DEBUG)

# Include routers
app.include_router(export.router)


@app.get("/health")
def health():
    return {"status": "ok"}


logger.debug("Mealboard API initialised (debug=%s)", config.DEBUG)
