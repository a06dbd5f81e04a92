import multiprocessing, os
bind = os.getenv("OTP_ENGINE_BIND", "127.0.0.1:8000")
workers = int(os.getenv("OTP_ENGINE_WORKERS", multiprocessing.cpu_count() * 2 + 1))
threads = 2
worker_class = "gthread"
timeout = 30
graceful_timeout = 30
keepalive = 5
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
