"""
DEVGRAPH Test Suite
===================

Test organization:
- tests/unit/                   - Configuration, logging and CLI tests
- tests/services/defect_graph/  - Graph store, matcher, ranking and query tests

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest --cov=services           # With coverage
"""
