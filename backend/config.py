import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///pew.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # HMAC key for session tokens; override in production
    ANTICHEAT_SECRET = os.environ.get('ANTICHEAT_SECRET') or 'pew-md-secret-2026'
    # Replay guard capacity (oldest consumed sessions are forgotten first)
    MAX_USED_SESSIONS = int(os.environ.get('MAX_USED_SESSIONS', '10000'))
    # Plausibility bounds
    MIN_GAME_DURATION_SEC = float(os.environ.get('MIN_GAME_DURATION_SEC', '2'))
    MAX_SCORE_RATE = float(os.environ.get('MAX_SCORE_RATE', '200'))
    # Rows returned by the leaderboard
    LEADERBOARD_SIZE = int(os.environ.get('LEADERBOARD_SIZE', '10'))
    # Comma-separated list of browser origins allowed to call the API
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173',
    ).split(',') if o.strip()]
