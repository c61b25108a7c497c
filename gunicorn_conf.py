import os

# Basic config
host = os.getenv("HOST", "0.0.0.0")
port = os.getenv("PORT", "8080")
bind = f"{host}:{port}"

# Station build locks are per process, so one worker keeps builds single-flight
workers = int(os.getenv("WORKERS", "1"))
worker_class = "uvicorn.workers.UvicornWorker"
keepalive = 120
timeout = int(os.getenv("TIMEOUT", "120"))

# Logging
loglevel = os.getenv("LOG_LEVEL", "info").lower()
errorlog = "-"  # stderr
accesslog = "-"  # stdout
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s"'
