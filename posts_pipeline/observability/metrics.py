"""
Prometheus metrics collection for posts-pipeline

Both scripts are short-lived, so metrics live in a private registry that the
CLIs can dump to a textfile for the node exporter's textfile collector.
"""
from pathlib import Path

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    write_to_textfile,
)


# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# INGESTION METRICS
# =======================

posts_parsed_total = Counter(
    name="posts_pipeline_posts_parsed_total",
    documentation="Total number of row elements read from the XML export",
    registry=REGISTRY,
)

posts_loaded_total = Counter(
    name="posts_pipeline_posts_loaded_total",
    documentation="Total number of documents inserted into the collection",
    registry=REGISTRY,
)

coercion_fallbacks_total = Counter(
    name="posts_pipeline_coercion_fallbacks_total",
    documentation="Field values that could not be parsed and fell back to a default",
    labelnames=["field_name"],
    registry=REGISTRY,
)

# =======================
# REPORTING METRICS
# =======================

reports_rendered_total = Counter(
    name="posts_pipeline_reports_rendered_total",
    documentation="Total number of report documents written",
    labelnames=["report", "status"],  # status: success, failure
    registry=REGISTRY,
)

# =======================
# TIMING
# =======================

stage_duration_seconds = Histogram(
    name="posts_pipeline_stage_duration_seconds",
    documentation="Time spent in each pipeline stage in seconds",
    labelnames=["stage"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
    registry=REGISTRY,
)


def record_stage_duration(stage: str, duration_seconds: float) -> None:
    """
    Observe the duration of a pipeline stage.

    Args:
        stage: Stage name (parse, normalize, rank, load, aggregate, search, render)
        duration_seconds: Elapsed time
    """
    stage_duration_seconds.labels(stage=stage).observe(duration_seconds)


def record_coercion_fallback(field_name: str) -> None:
    """Count a field value that fell back to its default."""
    coercion_fallbacks_total.labels(field_name=field_name).inc()


def record_report_rendered(report: str, success: bool = True) -> None:
    """Count a report render attempt."""
    status = "success" if success else "failure"
    reports_rendered_total.labels(report=report, status=status).inc()


def write_metrics(path: str | Path) -> None:
    """
    Write the current registry in Prometheus text format.

    Args:
        path: Destination file; parent directories are created
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    write_to_textfile(str(path), REGISTRY)
