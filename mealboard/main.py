import logging

import uvicorn
from mealboard.api.api_run import app
from mealboard.utilities import config


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # Print a friendly message that points to the interactive API docs
    print(f"Mealboard export API on http://localhost:{config.APP_PORT}/docs (Press CTRL+C to quit)")
    uvicorn.run(app, host=config.APP_HOST, port=config.APP_PORT)
