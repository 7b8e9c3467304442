"""Dependencies and app state for FastAPI routes."""

from fastapi import Request

from .config import WorkerSettings, get_settings
from .controller import JobController


def get_worker_settings(request: Request) -> WorkerSettings:
    """Return WorkerSettings from app state or read them from env (cached on app state)."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = get_settings()
        request.app.state.settings = settings
    return settings


def build_job_controller(settings: WorkerSettings) -> JobController:
    """Wire the controller from settings and the platform blob store."""
    from transcode_adapters import blob_store_from_env

    from .ffmpeg_transcode import FfmpegTranscoder
    from .scratch import ScratchSpace

    return JobController(
        scratch=ScratchSpace(settings.raw_scratch_dir, settings.processed_scratch_dir),
        storage=blob_store_from_env(),
        transcoder=FfmpegTranscoder(
            ffmpeg_binary=settings.ffmpeg_binary,
            timeout_sec=settings.transcode_timeout_sec,
        ),
        raw_bucket=settings.raw_bucket_name,
        processed_bucket=settings.processed_bucket_name,
        profile=settings.profile,
        skip_if_published=settings.skip_if_published,
    )


async def get_job_controller(request: Request) -> JobController:
    """
    Return the JobController built at startup (or injected by tests).

    Runs on the event loop, so the fallback build happens at most once per app.
    """
    controller = getattr(request.app.state, "job_controller", None)
    if controller is None:
        controller = build_job_controller(get_worker_settings(request))
        request.app.state.job_controller = controller
    return controller
