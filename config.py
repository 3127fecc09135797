import os

# 기본 디렉토리 설정
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# 경로 설정
QUIZ_DIR = os.getenv("QUIZ_DIR", os.path.join(BASE_DIR, "quizzes"))
LOG_FILE = os.path.join(BASE_DIR, "launch.log")

# 서버 설정
DEFAULT_HOST = os.getenv("HOST", "127.0.0.1")
DEFAULT_PORT = int(os.getenv("PORT", "8000"))

# 세션 설정
SESSION_COOKIE = "quiz_session"
SESSION_TTL = int(os.getenv("SESSION_TTL", "3600"))  # 1시간
SESSION_CLEANUP_INTERVAL = 300

# 퀴즈 설정
DEFAULT_TIME_LIMIT = int(os.getenv("QUIZ_TIME_LIMIT", "300"))  # 5분 (표시용)
PASS_SCORE = float(os.getenv("QUIZ_PASS_SCORE", "60"))          # 합격 기준 (100점 환산)
