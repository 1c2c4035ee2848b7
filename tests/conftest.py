import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Detach handlers installed by init_vfs_logging (the CLI installs one per run)."""
    yield
    package_logger = logging.getLogger("logix_vfs")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
