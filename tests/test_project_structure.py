"""Basic project scaffolding tests."""

import importlib


def test_package_importable() -> None:
    """Verify the top-level package is importable."""
    import salvo  # noqa: F401  (import used to ensure availability)

    assert salvo.__version__


def test_submodules_exist() -> None:
    modules = [
        "salvo.cli",
        "salvo.config",
        "salvo.engine",
        "salvo.engine.instrumented_session",
        "salvo.telemetry",
    ]

    for module in modules:
        assert importlib.import_module(module) is not None
