from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from flask import Response, request
import time
from functools import wraps

# API Metrics
api_request_duration_seconds = Histogram(
    "portfolio_api_request_duration_seconds", "API request duration", ["endpoint", "method"]
)

api_requests_total = Counter("portfolio_api_requests_total", "Total API requests", ["endpoint", "method", "status_code"])

# Upload Metrics
upload_operations_total = Counter(
    "portfolio_upload_operations_total", "Upload gateway operations", ["backend", "operation", "status"]
)

upload_bytes_total = Counter("portfolio_upload_bytes_total", "Bytes sent to the upload gateway", ["backend"])

# Tag Metrics
tags_created_total = Counter("portfolio_tags_created_total", "Tags inserted by get-or-create or explicit create", ["family"])


def init_metrics(app):
    @app.route("/api/metrics")
    def metrics():
        return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)

    @app.before_request
    def before_request():
        request.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration = time.time() - getattr(request, "start_time", time.time())
        api_request_duration_seconds.labels(endpoint=request.endpoint or "unknown", method=request.method).observe(
            duration
        )
        api_requests_total.labels(
            endpoint=request.endpoint or "unknown", method=request.method, status_code=response.status_code
        ).inc()
        return response

    app.logger.info("Prometheus metrics initialized at /api/metrics")


def track_upload(operation):
    """Count upload gateway calls per backend and outcome."""
    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                result = func(self, *args, **kwargs)
                upload_operations_total.labels(backend=self.backend.value, operation=operation, status="success").inc()
                return result
            except Exception:
                upload_operations_total.labels(backend=self.backend.value, operation=operation, status="error").inc()
                raise

        return wrapper

    return decorator
