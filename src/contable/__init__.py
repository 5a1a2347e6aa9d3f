"""Console and client library for a double-entry accounting REST backend."""

__version__ = "0.1.0"


# The CLI and backend factory pull in click and httpx, so they load on first use
def __getattr__(name):
    if name == "main":
        from contable.cli.main import main
        return main
    if name == "create_http_backend":
        from contable.backend.factories import create_http_backend
        return create_http_backend
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
