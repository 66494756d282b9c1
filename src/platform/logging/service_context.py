"""
Service identification for log lines.

`SERVICE_NAME@DEPLOY_ENV:instance`, where instance is the ECS task id when running
on ECS and the process id everywhere else.
"""

from functools import lru_cache
import os


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'pricing-engine')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    instance = str(os.getpid())
    metadata_uri = os.getenv('ECS_CONTAINER_METADATA_URI_V4', '')
    if metadata_uri:
        # http://169.254.170.2/v4/{task_id}-{timestamp}
        instance = metadata_uri.rstrip('/').split('/')[-1].split('-')[0][:8] or 'ecs'

    return f'{service_name}@{deploy_env}:{instance}'
