#!/usr/bin/env python3
import logging

import uvicorn

from report_builder.app import create_app
from report_builder.core.config import HOST, PORT

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create the FastAPI app
app = create_app()


if __name__ == "__main__":
    logging.getLogger(__name__).info("Starting report builder on %s:%s", HOST, PORT)
    uvicorn.run("main:app", host=HOST, port=PORT, reload=False)
