import os

from dotenv import load_dotenv
load_dotenv(".env")
from aiohttp import web

import info
from app.logger import logger
from app.server import create_app

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))


def main():
    logger.info("Starting LeetStats proxy version %s on %s:%s", info.__version__, HOST, PORT)
    web.run_app(create_app(), host=HOST, port=PORT, print=None)


if __name__ == "__main__":
    main()
