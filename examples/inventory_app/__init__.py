from .demo import (  # noqa: F401
    apply_adjustments,
    bootstrap_store,
    run_demo,
    seed_stock,
)

__all__ = [
    "bootstrap_store",
    "seed_stock",
    "apply_adjustments",
    "run_demo",
]
