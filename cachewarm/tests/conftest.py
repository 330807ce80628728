"""Module that adds flags to pytest to enable tests against a real mount point."""

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--mount",
        action="store",
        default=None,
        help="Run tests against the instance mounted at this path",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "mount: mark test as requiring a mount to run")


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--mount"):
        skip_mount = pytest.mark.skip(reason="only runs with --mount option")

        for item in items:
            if "mount" in item.keywords:
                item.add_marker(skip_mount)


@pytest.fixture
def mount_point(request):
    return request.config.getoption("--mount")
