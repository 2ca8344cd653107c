"""
Serving — FastAPI application that triggers ingestion over HTTP.

Runs full or pull-request ingestion as background tasks and accepts
GitHub ``pull_request`` webhooks so merged documentation is re-embedded
automatically.
"""
