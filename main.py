import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# HTTP 라이브러리 디버그 로그 비활성화
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)

# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ DB / 모델 (create_all 전에 모든 테이블 등록)
from database.db import Base, engine
from models import locations, students, teachers, student_grades, teacher_reviews  # noqa: F401

# ✅ 라우터 임포트
from routers import (
    locations as locations_router,
    students as students_router,
    teachers as teachers_router,
    student_grades as student_grades_router,
    teacher_reviews as teacher_reviews_router,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
app.add_middleware(TimingMiddleware)

# ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
add_error_handlers(app)

# ✅ /v1 프리픽스 라우터 등록
app.include_router(locations_router.router,       prefix="/v1")
app.include_router(students_router.router,        prefix="/v1")
app.include_router(teachers_router.router,        prefix="/v1")
app.include_router(student_grades_router.router,  prefix="/v1")
app.include_router(teacher_reviews_router.router, prefix="/v1")


@app.on_event("startup")
def _create_tables():
    Base.metadata.create_all(bind=engine)
    logger.info("%s %s started (env=%s)", settings.APP_TITLE, settings.APP_VERSION, settings.ENV)


# ✅ 헬스체크 엔드포인트
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}


# ✅ 루트 엔드포인트
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - {settings.APP_DESCRIPTION}"}
