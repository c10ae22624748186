"""
Test suite for thermokernels.

Test Structure:
- test_core.py: Sort kernel and Kahan summation
- test_logspace.py: logsumexp family
- test_segmentation.py: Break-point detection
- test_transition.py: Transition matrix renormalization
- test_algorithms.py: Array front-end and batch processing
- test_config.py: Runtime configuration
- conftest.py: Shared fixtures and configuration

Usage:
    # Run all tests
    pytest

    # Run tests with coverage
    pytest --cov=thermokernels

    # Run only fast tests
    pytest -m "not slow"
"""
