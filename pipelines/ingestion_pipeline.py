"""KFP v2 pipeline — Documentation ingestion workflow.

Wraps :func:`~pipelines.components.ingest_docs.ingest_repository_docs` so
that full re-ingestion and pull-request ingestion can be scheduled as
Kubeflow runs (e.g. a nightly recurring run plus one run per merged PR).

GitHub, embedding and Chroma credentials are expected in the component's
environment, typically injected from a Kubernetes secret.

Compile
-------
    python -m pipelines.ingestion_pipeline --compile
"""

from kfp import compiler, dsl

from pipelines.components.ingest_docs import ingest_repository_docs


# ──────────────────────────────────────────────────────────────────────
# Pipeline definition
# ──────────────────────────────────────────────────────────────────────


@dsl.pipeline(
    name="docs-ingestion-pipeline",
    description=(
        "Walk a GitHub repository's documentation (or one pull request's "
        "changed docs), split it into sections, embed, and store the "
        "vectors with their source URL."
    ),
)
def docs_ingestion_pipeline(
    mode: str = "full",
    root_path: str = "",
    pull_number: int = 0,
    throttle_seconds: float = 0.2,
    log_level: str = "INFO",
) -> None:
    """Single-step ingestion: walk → sectionize → embed → store.

    Parameters
    ----------
    mode:
        ``"full"`` | ``"pull_request"``
    root_path:
        Repository path to walk in ``full`` mode (empty = configured root).
    pull_number:
        Pull request number in ``pull_request`` mode.
    throttle_seconds:
        Pause between listing entries / changed files.
    log_level:
        Python logging level inside the component.
    """
    ingest_task = ingest_repository_docs(
        mode=mode,
        root_path=root_path,
        pull_number=pull_number,
        throttle_seconds=throttle_seconds,
        log_level=log_level,
    )
    # Side-effecting step: always execute.
    ingest_task.set_caching_options(False)


# ──────────────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────────────


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Documentation ingestion pipeline")
    parser.add_argument(
        "--compile",
        action="store_true",
        help="Compile pipeline to YAML",
    )
    parser.add_argument(
        "--output",
        default="pipelines/compiled/docs_ingestion_pipeline.yaml",
        help="Output path for compiled YAML",
    )
    args = parser.parse_args()

    if args.compile:
        compiler.Compiler().compile(docs_ingestion_pipeline, args.output)
        print(f"Pipeline compiled → {args.output}")
