from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shortener.api.v1.router import router as v1_router
from shortener.config import settings
from shortener.logging_config import setup_logging

# title參數: 設定 API的標題名稱，會顯示在Swagger UI (/docs) 與 ReDoc (/redoc)
app = FastAPI(title="URL Shortener API")

# 允許瀏覽器從其他網域呼叫API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# prefix參數設定URL路徑前綴，所有透過v1_router定義的endpoint都會加上這個前綴
app.include_router(v1_router, prefix="/api/v1")

# Setup application logging
logger = setup_logging()


@app.get("/")
def root():
    """Liveness check."""
    return "Hello World!"


# 當任何地方拋出HTTPException時，呼叫下面的function
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Unwrap the 'detail' field from HTTPException responses."""
    content = exc.detail

    if isinstance(content, dict):
        return JSONResponse(
            status_code=exc.status_code,
            content=content
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": content},
    )


# FastAPI預設對格式錯誤的request body回傳422，這裡統一改成400與{error, details}格式
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.error(
        f"Invalid request body: {details}",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": details},
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    # Log detailed error for debugging (includes stack trace)
    logger.error(
        f"Unhandled exception: {exc.__class__.__name__}: {str(exc)}",
        exc_info=True,  # 把完整的錯誤堆疊都記錄下來
        # 添加自訂欄位到日誌中, 可以幫助我們快速定位是哪個API路徑和HTTP方法發生錯誤
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    # Return safe, static message to client (no internal details exposed)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )
