# digipin_api/main.py
import uvicorn
from fastapi import APIRouter, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from . import config
from .digipin import InvalidCode, OutOfBound, decode_digipin, get_digipin
from .logging_utils import setup_logger
from .schemas import DecodeRequest, DecodeResponse, EncodeRequest, EncodeResponse

logger = setup_logger(__name__)

app = FastAPI(title=config.APP_TITLE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix=config.API_PREFIX, tags=["digipin"])


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors, reported the same way as missing fields."""
    logger.warning(f"Rejected request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Malformed request body"},
    )


@router.post("/encode", response_model=EncodeResponse)
def encode_digipin(body: EncodeRequest):
    """Encodes a latitude/longitude pair into a DIGIPIN."""
    if body.latitude is None or body.longitude is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="latitude and longitude are required",
        )

    try:
        result = get_digipin(body.latitude, body.longitude)
    except Exception as e:
        logger.exception(f"Error encoding ({body.latitude}, {body.longitude})")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred during encoding: {e}",
        )

    if isinstance(result, OutOfBound):
        logger.warning(f"Coordinates out of bound: ({result.latitude}, {result.longitude})")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Coordinates are outside the DIGIPIN region",
        )

    return EncodeResponse(digipin=result)


@router.post("/decode", response_model=DecodeResponse)
def decode_digipin_endpoint(body: DecodeRequest):
    """Decodes a DIGIPIN into the centre of its cell."""
    if not body.digipin:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="digipin is required",
        )

    try:
        result = decode_digipin(body.digipin)
    except Exception as e:
        logger.exception(f"Error decoding {body.digipin!r}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred during decoding: {e}",
        )

    if isinstance(result, InvalidCode):
        logger.warning(f"Invalid DIGIPIN {result.digipin!r}: {result.reason}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid DIGIPIN provided",
        )

    return DecodeResponse(latitude=result.latitude, longitude=result.longitude)


app.include_router(router)


@app.get("/health", response_class=PlainTextResponse)
async def health():
    return "DIGIPIN API is running"


def run():
    """Starts the API server on the configured host and port."""
    logger.info(f"Server running at http://{config.HOST}:{config.PORT}")
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
