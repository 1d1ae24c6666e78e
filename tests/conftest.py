"""
Global test configuration and fixtures
"""

import time

import pytest

# Slow test thresholds (seconds)
SLOW_TEST_THRESHOLD = 2.0
WARNING_TEST_THRESHOLD = 0.5


@pytest.fixture(autouse=True)
def track_test_duration(request):
    """Track every test's duration and warn on slow ones"""
    start_time = time.time()

    yield

    duration = time.time() - start_time
    test_name = request.node.nodeid

    if duration > SLOW_TEST_THRESHOLD:
        print(f"\n⚠️  SLOW TEST ({duration:.2f}s): {test_name}")
    elif duration > WARNING_TEST_THRESHOLD:
        print(f"\n⏱️  Slow ({duration:.2f}s): {test_name}")


def pytest_collection_modifyitems(config, items):
    """Add markers from the test path"""
    for item in items:
        path = str(item.fspath)
        if "/unit/" in path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in path:
            item.add_marker(pytest.mark.integration)


def pytest_report_header(config):
    return [
        f"Slow test threshold: {SLOW_TEST_THRESHOLD}s",
        f"Warning threshold: {WARNING_TEST_THRESHOLD}s",
    ]
