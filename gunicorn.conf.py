wsgi_app = "app:app"
bind = "0.0.0.0:8080"
workers = 2          # each worker keeps its own brand logo cache
threads = 8          # preview calls mostly wait on upstream sites
timeout = 30         # well above the 5s per-fetch bound
graceful_timeout = 15
keepalive = 5
preload_app = True
