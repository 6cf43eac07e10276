import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from apis.base import api_router
from core.config import settings
from schemas.run import RunResponse

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Server running at http://localhost:{settings.PORT}")
    logger.info(f"Using compiler {settings.COMPILER_PATH}")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # /run reports every failure through the output field with a 200
    if request.url.path != "/run":
        return await request_validation_exception_handler(request, exc)

    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}")
    output = "Invalid request: " + "; ".join(messages)
    logger.info(output)
    return JSONResponse(status_code=200, content=RunResponse(output=output).model_dump())


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": settings.PROJECT_VERSION}


app.include_router(api_router)

# registered last, the static mount catches every path the routes above do not
if os.path.isdir(settings.STATIC_DIR):
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
else:
    logger.warning(f"Static directory {settings.STATIC_DIR} not found, static files disabled")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
