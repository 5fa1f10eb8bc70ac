import logging

from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from experience_x.api.schemas import ErrorResponse, ExperienceRequest, ExperienceResponse
from experience_x.errors import RequestValidationError
from experience_x.service.experience import ExperienceOrchestrator

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, Content-MD5, "
        "Content-Type, Date, X-Api-Version"
    ),
}
ACCEPTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

app = FastAPI(title="experience-x", version="0.1.0")
orchestrator = ExperienceOrchestrator()


@app.middleware("http")
async def add_cors_headers(request: Request, call_next) -> Response:
    response = await call_next(request)
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == 405:
        logger.info("experience.rejected method=%s path=%s", request.method, request.url.path)
        return _error(405, "Method not allowed")
    return await http_exception_handler(request, exc)


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}


@app.api_route("/api/experience", methods=ACCEPTED_METHODS, response_model=None)
async def experience(request: Request) -> Response:
    if request.method == "OPTIONS":
        return Response(status_code=200)
    if request.method != "POST":
        logger.info("experience.rejected method=%s", request.method)
        return _error(405, "Method not allowed")

    try:
        req = await _parse_request(request)
    except RequestValidationError as exc:
        logger.info("experience.rejected reason=%s", exc)
        return _error(400, "Query is required")

    document = await orchestrator.generate(req.query)
    body = ExperienceResponse(**document.as_payload())
    return JSONResponse(status_code=200, content=body.model_dump(exclude_none=True))


async def _parse_request(request: Request) -> ExperienceRequest:
    raw = await request.body()
    try:
        return ExperienceRequest.model_validate_json(raw)
    except ValidationError as exc:
        raise RequestValidationError(f"invalid query: {exc.error_count()} error(s)") from exc


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())
