# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Build the FastAPI application for a SokobanEnvironment.

The OpenEnv server provides /health, /reset, /step, /state, /schema and
/metadata. On top of that:

    GET /render   the board as plain text

and a level that is not a bundled level number is answered with 422.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from openenv.core.env_server.http_server import create_app

from ..exceptions import InvalidLevelSource
from ..models import SokobanAction, SokobanObservation
from .sokoban_environment import SokobanEnvironment

logger = logging.getLogger(__name__)

UNPROCESSABLE = 422


def build_app(env: SokobanEnvironment, env_name: str = "sokoban_env") -> FastAPI:
    """
    Create the FastAPI application serving one environment instance.

    Args:
        env: The environment to serve
        env_name: Environment name passed to the OpenEnv server

    Returns:
        FastAPI application with the OpenEnv routes and /render
    """
    app = create_app(env, SokobanAction, SokobanObservation, env_name=env_name)

    @app.exception_handler(InvalidLevelSource)
    async def invalid_level(request: Request, exc: InvalidLevelSource) -> JSONResponse:
        logger.warning(f"Reset rejected: {exc}")
        return JSONResponse(status_code=UNPROCESSABLE, content={"detail": str(exc)})

    @app.get("/render", response_class=PlainTextResponse)
    async def render() -> str:
        return str(env.session)

    return app
