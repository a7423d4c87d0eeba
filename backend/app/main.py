import os
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .api import router as api_router
from .errors import WaterCheckError
from .healthcheck import router as health_router
from .logging_setup import logger

CORS_ORIGINS = [o.strip() for o in os.getenv("CLIMATEIO_CORS_ORIGINS", "*").split(",") if o.strip()]

app = FastAPI(title="Climate.io Water Check - API", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(api_router)


@app.exception_handler(WaterCheckError)
async def water_check_error_handler(request: Request, exc: WaterCheckError):
    if exc.status_code >= 500:
        logger.error(f"[main] {request.method} {request.url.path} -> {exc.status_code}: {exc}")
    else:
        logger.warning(f"[main] {request.method} {request.url.path} -> {exc.status_code}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


@app.get("/")
def root():
    return {"status": "climate.io water check backend running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
