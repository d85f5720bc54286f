"""
Benchmark harness.

    from sortcheck.bench import time_check_call
    python -m sortcheck.bench.runner <config.yaml>
"""

from .measure import time_check_call

__all__ = ["time_check_call"]
