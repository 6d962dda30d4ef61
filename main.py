from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from api.transform import router as transform_router
from api.feedback import router as feedback_router
from api.usage import router as usage_router
from utils.exceptions import InvalidRequestError, PipelineError
from utils.logging import logger
from config.settings import settings

app = FastAPI(
    title="Business Tone Conversion API",
    description="감정적인 문장을 비즈니스 문체로 바꿔주는 2단계(분석 → 변환) LLM 파이프라인 API",
    version="1.0.0"
)

# 라우터 등록
app.include_router(transform_router)
app.include_router(feedback_router)
app.include_router(usage_router)


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError):
    return JSONResponse(status_code=exc.status_code, content={"ok": False, "error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(f"잘못된 요청 ({request.url.path}): {len(exc.errors())}개 오류")
    error = InvalidRequestError()
    return JSONResponse(status_code=error.status_code, content={"ok": False, "error": error.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"처리되지 않은 오류 ({request.url.path}): {exc}")
    return JSONResponse(status_code=500, content={"ok": False, "error": PipelineError.default_message})


@app.get("/", include_in_schema=False)
async def read_root():
    return {
        "message": "Business Tone Conversion API가 실행 중입니다.",
        "docs": "/docs",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """서비스 상태 확인"""
    return {
        "status": "healthy",
        "version": "1.0.0",
        "settings": {
            "debug": settings.debug,
            "default_model": settings.default_model,
            "confidence_threshold": settings.confidence_threshold
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
