import logging
import uuid

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from api.api_v1.api import api_router
from core.config import settings
from log import reset_flow_id, set_flow_id, setup_logging_to_console, setup_seq_logging

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME, openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:4000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def flow_id_middleware(request: Request, call_next):
    flow_id = request.headers.get("X-Flow-Id") or str(uuid.uuid4())
    token = set_flow_id(flow_id)
    try:
        response = await call_next(request)
    finally:
        reset_flow_id(token)
    response.headers["X-Flow-Id"] = flow_id
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation",
            "validation": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"error": str(exc)},
    )


app.include_router(api_router, prefix=settings.API_V1_STR)


if __name__ == "__main__":
    setup_logging_to_console(level=logging.INFO)
    setup_seq_logging(settings.SEQ_SERVER_URL, settings.SEQ_SERVER_API_KEY)
    uvicorn.run(app, host="0.0.0.0", port=8001)
