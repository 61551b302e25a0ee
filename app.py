import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from auth import TokenVerifier
from errors import InvalidArgumentError
from routes.reservation_route import reservation_router
from routes.restaurant_route import restaurant_router
from routes.table_route import table_router
from routes.user_route import user_router

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Restaurant Reservations")

# one verifier for the whole process, injected into handlers via app.state
app.state.token_verifier = TokenVerifier.from_env()

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(user_router)
app.include_router(restaurant_router)
app.include_router(table_router)
app.include_router(reservation_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request fields get the same 400 envelope as any other invalid argument."""
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{field}: {error.get('msg')}")
    message = "Invalid request: " + "; ".join(problems)
    return await http_exception_handler(request, InvalidArgumentError(message))


@app.get("/")
async def base_path():
    """
    Root endpoint to verify that the API is running.

    Returns:
        dict: A success message.
    """
    return {"success": True}


@app.get("/health")
async def health():
    return {"success": True, "message": "Server is running"}
