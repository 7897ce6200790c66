from .demo import (  # noqa: F401
    bootstrap_session,
    restock_report,
    run_demo,
    seed_sample_data,
)

__all__ = [
    "bootstrap_session",
    "seed_sample_data",
    "restock_report",
    "run_demo",
]
