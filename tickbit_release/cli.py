"""
Zero-argument entry points.

Every script exits 0 on success and 1 on any error, after logging the error
with its traceback to stderr.
"""

import logging
import sys
from typing import Callable

from .deployer import deploy_contract
from .log import setup_logging
from .propagator import PRIMARY, SECONDARY, propagate

LOG = logging.getLogger(__name__)


def run(fn: Callable[[], object]) -> int:
    setup_logging()
    try:
        fn()
    except Exception:
        LOG.exception("Aborted")
        return 1
    return 0


def deploy_main():
    sys.exit(run(deploy_contract))


def update_tickbit_address_main():
    sys.exit(run(lambda: propagate(PRIMARY)))


def update_tickbit_ticket_address_main():
    sys.exit(run(lambda: propagate(SECONDARY)))
