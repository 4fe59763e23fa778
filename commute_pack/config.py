import os
from pathlib import Path

from dotenv import load_dotenv

# -----------------------------------------
#  환경변수 로드 (프로젝트 루트 .env)
# -----------------------------------------
_CURRENT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = _CURRENT_DIR.parent
_ENV_PATH = PROJECT_ROOT / ".env"
if _ENV_PATH.exists():
    load_dotenv(_ENV_PATH)

# Notion
NOTION_API_KEY = os.getenv("NOTION_API_KEY")
NOTION_API_BASE = os.getenv("NOTION_API_BASE", "https://api.notion.com/v1")
NOTION_VERSION = os.getenv("NOTION_VERSION", "2022-06-28")

# 경로 계산 (Google / Kakao)
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY")
KAKAO_REST_API_KEY = os.getenv("KAKAO_REST_API_KEY")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

# 저장 경로 저장소: "file" | "memory" | "mongo"
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "file")
STORAGE_PATH = Path(os.getenv("STORAGE_PATH", str(PROJECT_ROOT / "data" / "storage.json")))
MONGO_URI = os.getenv("MONGO_URI", "mongodb://127.0.0.1:27017")
MONGO_DB = os.getenv("MONGO_DB", "commute_pack")
MONGO_COLLECTION = os.getenv("MONGO_COLLECTION", "kv_store")

# 학습 시간 범위 (분)
DEFAULT_MINUTES = int(os.getenv("DEFAULT_MINUTES", "25"))
MIN_MINUTES = int(os.getenv("MIN_MINUTES", "10"))
MAX_MINUTES = int(os.getenv("MAX_MINUTES", "90"))

# 서버 실행 (python server.py)
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
API_RELOAD = os.getenv("API_RELOAD", "false").lower() in ("1", "true", "yes")
