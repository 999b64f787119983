import os

# Tests never export spans; keep the app from installing a tracer provider.
os.environ.setdefault("JOBLY_OTEL_ENABLED", "false")
