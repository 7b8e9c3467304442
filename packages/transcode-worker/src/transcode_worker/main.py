"""
FastAPI app: push endpoint that runs one transcode job per notification.

POST /process-video receives the broker's push envelope, runs the job controller
and answers 200 (ack), 400 (bad payload) or 500 (job failed; the broker may redeliver).
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse

from transcode_shared import JobOutcome, configure_logging

from .config import WorkerSettings, bootstrap_env, get_settings
from .controller import JobController
from .deps import build_job_controller, get_job_controller
from .ingress import decode_job, message_for_outcome, status_for_outcome
from .scratch import ScratchSpace

# Load .env from TRANSCODE_ENV_FILE if set. Unset in containers.
bootstrap_env()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: WorkerSettings = getattr(app.state, "settings", None) or get_settings()
    app.state.settings = settings
    ScratchSpace(settings.raw_scratch_dir, settings.processed_scratch_dir).ensure_roots()
    # One controller per process so every request shares the same key locks
    if getattr(app.state, "job_controller", None) is None:
        app.state.job_controller = build_job_controller(settings)
    logger.info(
        "transcode-worker ready; raw_bucket=%s processed_bucket=%s height=%s",
        settings.raw_bucket_name,
        settings.processed_bucket_name,
        settings.target_height,
    )
    yield


app = FastAPI(title="Video Transcode Worker", version="0.1.0", lifespan=lifespan)


@app.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return "Video processing service is running"


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}


@app.post("/process-video", response_class=PlainTextResponse)
async def process_video(
    request: Request,
    controller: JobController = Depends(get_job_controller),
) -> PlainTextResponse:
    """Decode the push envelope, run the job, map the outcome to a status."""
    job = decode_job(await request.body())
    if isinstance(job, JobOutcome):
        logger.warning("process-video: rejected delivery: %s", job.reason)
        return PlainTextResponse(message_for_outcome(job), status_code=status_for_outcome(job))
    descriptor = job

    outcome = await controller.process(descriptor)
    status = status_for_outcome(outcome)
    logger.info(
        "process-video: source_key=%s outcome=%s status=%s",
        descriptor.source_key,
        outcome.kind.value,
        status,
    )
    return PlainTextResponse(message_for_outcome(outcome), status_code=status)


def main() -> None:
    """Run the worker with uvicorn on HOST:PORT."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    logger.info("transcode-worker listening on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
