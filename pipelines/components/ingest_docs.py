"""KFP v2 component — Ingest repository documentation into the vector store.

Runs either a full walk of the documentation root or an incremental scan
of one pull request, inside the image named by ``COMPONENT_IMAGE``
(override with ``DOCS_VECTORIZER_IMAGE`` when compiling). Connection
details and credentials come from the container environment (see
``docs_vectorizer.config.Settings``); the parameters below only override
what varies between runs.

Local testing
-------------
    from pipelines.components.ingest_docs import ingest_repository_docs
    ingest_repository_docs.python_func(
        mode="full",
        root_path="docs",
        metrics=_FakeArtifact("/tmp/metrics"),
    )
"""

import os

from kfp import dsl

# Image built from the repository Dockerfile; it already contains
# docs-vectorizer and kfp, so nothing is pip-installed at run time.
COMPONENT_IMAGE = os.environ.get("DOCS_VECTORIZER_IMAGE", "docs-vectorizer:0.1.0")


@dsl.component(
    base_image=COMPONENT_IMAGE,
    install_kfp_package=False,
)
def ingest_repository_docs(
    metrics: dsl.Output[dsl.Metrics],
    mode: str = "full",
    root_path: str = "",
    pull_number: int = 0,
    throttle_seconds: float = 0.2,
    log_level: str = "INFO",
) -> str:
    """Walk, sectionize, embed, and store documentation.

    Parameters
    ----------
    metrics:
        Output Metrics artifact with ingestion statistics.
    mode:
        ``"full"`` walks *root_path*; ``"pull_request"`` scans *pull_number*.
    root_path:
        Repository path to walk; empty means the configured docs root.
    pull_number:
        Pull request to scan (``pull_request`` mode only).
    throttle_seconds:
        Pause after each listing entry / changed file.
    log_level:
        Python logging level for the run.

    Returns
    -------
    str
        Human-readable summary.
    """
    import logging

    from docs_vectorizer.config import Settings
    from docs_vectorizer.github.pull_requests import PullRequestScanner
    from docs_vectorizer.ingestion.pipeline import IngestionPipeline

    logging.basicConfig(level=log_level)
    log = logging.getLogger("ingest_repository_docs")

    config = Settings(throttle_seconds=throttle_seconds)
    pipeline = IngestionPipeline.from_settings(config)

    if mode == "full":
        target = root_path or config.docs_root
        pipeline.run(target)
    elif mode == "pull_request":
        if pull_number <= 0:
            raise ValueError(f"pull_number must be positive, got {pull_number}")
        target = f"pull request #{pull_number}"
        PullRequestScanner.from_settings(config, pipeline=pipeline).scan_pull_request(pull_number)
    else:
        raise ValueError(
            f"Unsupported mode={mode!r}. Choose from: full, pull_request."
        )

    stats = pipeline.stats
    metrics.log_metric("documents_ingested", stats.documents)
    metrics.log_metric("sections_submitted", stats.sections_submitted)
    metrics.log_metric("sections_failed", stats.sections_failed)

    msg = (f"Ingested {stats.documents} documents "
           f"({stats.sections_submitted} sections, {stats.sections_failed} failed) "
           f"from {target}")
    log.info(msg)
    return msg
