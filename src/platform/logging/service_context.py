"""
Service context extraction for logging.

Identifies the running process in log lines so that output from several
demo sessions or test workers can be told apart.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'cinema-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # pytest-xdist worker id when running tests in parallel, PID otherwise
    worker = os.getenv('PYTEST_XDIST_WORKER') or str(os.getpid())

    return f'{service_name}@{deploy_env}:{worker}'
