import logging

import uvicorn

from .app import app
from .core.config import Config

# Configure logging
logging.basicConfig(
    level=logging.INFO if Config.is_development() else logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
    ]
)
logger = logging.getLogger(__name__)


def run() -> None:
    uvicorn.run(app, host="0.0.0.0", port=8080)


if __name__ == "__main__":
    run()
