# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
FastAPI application for the Sokoban Environment.

This module creates an HTTP server that exposes the SokobanEnvironment
over the OpenEnv HTTP endpoints, making it compatible with SokobanEnv.

Environment variables (all optional):
    SOKOBAN_LEVEL: Bundled level number or level file path (default: 1)
    SOKOBAN_SAVE_DIR: Directory holding save files (default: .)
    SOKOBAN_SAVE_FILE: Default save file name (default: sokoban_save.txt)
    SOKOBAN_STRICT_LOAD: Reject unknown save-file lines (default: false)
    SOKOBAN_SEED: Seed for the random computer player
    SOKOBAN_LOG_DIR: Directory of the server log file (default: logs)
    SOKOBAN_LOG_LEVEL: Log level (default: INFO)

Usage:
    # Development (with auto-reload):
    uvicorn sokoban_puzzle.server.app:app --reload --host 0.0.0.0 --port 8000

    # Production:
    uvicorn sokoban_puzzle.server.app:app --host 0.0.0.0 --port 8000

    # Or run directly:
    python -m sokoban_puzzle.server.app
"""

import logging
import os
from pathlib import Path

from .app_factory import build_app
from .sokoban_environment import DEFAULT_SAVE_FILE, SokobanEnvironment

# Read configuration from environment variables
level = os.getenv("SOKOBAN_LEVEL", "1")
save_dir = os.getenv("SOKOBAN_SAVE_DIR", ".")
save_file = os.getenv("SOKOBAN_SAVE_FILE", DEFAULT_SAVE_FILE)
strict_load = os.getenv("SOKOBAN_STRICT_LOAD", "false").lower() in ("1", "true", "yes")
seed_env = os.getenv("SOKOBAN_SEED")
seed = int(seed_env) if seed_env else None
log_dir = Path(os.getenv("SOKOBAN_LOG_DIR", "logs"))
log_level = os.getenv("SOKOBAN_LOG_LEVEL", "INFO").upper()

# Setup logging to file
os.makedirs(log_dir, exist_ok=True)
log_file = log_dir / "sokoban_server.log"

logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(log_file),
        logging.StreamHandler()  # Keep logging to console as well
    ]
)
logger = logging.getLogger(__name__)

# Create the environment instance
env = SokobanEnvironment(
    level=level,
    save_dir=save_dir,
    save_file=save_file,
    strict_load=strict_load,
    seed=seed,
)

app = build_app(env, env_name="sokoban_env")


@app.on_event("startup")
async def startup_event():
    logger.info("Sokoban server starting up.")


@app.on_event("shutdown")
def shutdown_event():
    logger.info("Sokoban server shutting down.")


def main(host: str = "0.0.0.0", port: int = 8000):
    """
    Entry point for direct execution.

    Args:
        host: Host address to bind to (default: "0.0.0.0")
        port: Port number to listen on (default: 8000)
    """
    import uvicorn

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
