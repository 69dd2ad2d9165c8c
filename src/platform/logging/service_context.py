"""
Service identification for log lines.

Every log record carries `<service>@<environment>:<instance>` so lines from
several API replicas can be told apart once they are aggregated.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'flight-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    # container hostname when orchestrated, PID locally
    instance = os.getenv('HOSTNAME', '')[:12] or str(os.getpid())
    return f'{service_name}@{deploy_env}:{instance}'
