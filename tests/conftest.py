import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_noisyfit_logger():
    # CLI runs attach handlers bound to CliRunner streams; drop them between tests
    yield
    log = logging.getLogger("noisyfit")
    for h in list(log.handlers):
        log.removeHandler(h)
        h.close()
    log.setLevel(logging.NOTSET)
