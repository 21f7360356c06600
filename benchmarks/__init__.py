"""Performance benchmarks for qnmin.

This package contains wall-clock benchmarks of the multivariate solver on
the NumPy and PyTorch linear algebra backends.
"""
