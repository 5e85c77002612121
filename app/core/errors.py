"""
Error taxonomy for the video ingestion pipeline.

Every error carries the stage it was raised from and whether resubmitting
the same request could succeed. Input and authorization problems are never
retryable; tool and transport failures are.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

log = logging.getLogger("errors")


class PipelineError(Exception):
    status_code = 500
    retryable = True
    default_stage = "pipeline"

    def __init__(self, message: str, *, stage: str | None = None):
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage

    def to_dict(self) -> dict:
        return {"detail": self.message, "stage": self.stage, "retryable": self.retryable}


# ---- caller must fix the request ----

class InputRejectedError(PipelineError):
    status_code = 400
    retryable = False
    default_stage = "validate"


class MalformedReferenceError(PipelineError):
    # stored reference with zero or several separators
    status_code = 500
    retryable = False
    default_stage = "resolve"


class NotFoundError(PipelineError):
    status_code = 404
    retryable = False
    default_stage = "lookup"


class AuthorizationError(PipelineError):
    status_code = 403
    retryable = False
    default_stage = "authorize"


# ---- external tools / transport ----

class InspectionError(PipelineError):
    status_code = 422
    default_stage = "inspect"


class ProbeFailedError(InspectionError):
    pass


class ProbeDecodeError(InspectionError):
    pass


class NoStreamsError(InspectionError):
    pass


class InvalidGeometryError(InspectionError):
    pass


class ProcessingError(PipelineError):
    status_code = 500
    default_stage = "remux"


class StorageError(PipelineError):
    status_code = 502
    default_stage = "upload"


async def pipeline_error_handler(request: Request, exc: PipelineError):
    log.warning(f"{type(exc).__name__} at stage={exc.stage} for {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PipelineError, pipeline_error_handler)
