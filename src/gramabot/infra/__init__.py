"""Infrastructure helpers: logging and tracing."""
