"""Gunicorn configuration for the contenthash API server."""

import multiprocessing

from cid_config import load_settings

settings = load_settings()

# Server socket
bind = f"0.0.0.0:{settings['PORT']}"
backlog = 2048

# Worker processes
workers = multiprocessing.cpu_count() * 2 + 1  # Formula: (2 x CPU cores) + 1
worker_class = "sync"  # Encoding is CPU-bound and short; no I/O to overlap
timeout = 30
keepalive = 2

# Logging
accesslog = "-"  # Log to stdout
errorlog = "-"   # Log to stderr
loglevel = "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = "contenthash_api"

# Server mechanics
daemon = False

# Each worker keeps its own LRU cache of encodings
max_requests = 10000  # Restart worker after this many requests
max_requests_jitter = 1000  # Add randomness to prevent all workers restarting at once
preload_app = True  # Load application code before forking workers
