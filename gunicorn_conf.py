#Note: run with `gunicorn -c gunicorn_conf.py main:app`
import multiprocessing
import os


def env(name: str, default, cast=str):
    """Environment setting, falling back to `default` when unset or unparsable."""
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return cast(value)
    except ValueError:
        return default


bind = f"0.0.0.0:{env('APP_PORT', 5051, int)}"

# Request handling is mostly waiting on Lichess and the identity service,
# so a few threads per worker go further than extra processes.
cores = multiprocessing.cpu_count() or 1
workers = env("GUNICORN_WORKERS", cores + 1, int)
threads = env("GUNICORN_THREADS", 4, int)
worker_class = env("GUNICORN_WORKER_CLASS", "gthread")

keepalive = env("GUNICORN_KEEPALIVE", 5, int)

# The identity service can be slow to answer
timeout = env("GUNICORN_TIMEOUT", 60, int)
graceful_timeout = env("GUNICORN_GRACEFUL_TIMEOUT", 30, int)

# Log to stdout/stderr for container visibility
accesslog = "-"
errorlog = "-"
loglevel = env("GUNICORN_LOGLEVEL", "info")

limit_request_line = 8190
limit_request_fields = 100
limit_request_field_size = 8190
