import logging

import uvicorn

from core.config import get_settings

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("api.main:app", host="0.0.0.0", port=get_settings().port, log_level="info")
