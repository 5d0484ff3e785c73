"""
Registry factory.

Builds an EntityRegistry from the STUDIO block of the Django settings.
"""

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from domain.project.scheduling import DASHBOARD_TASK_LIMIT
from domain.project.transitions import DEFAULT_MATERIAL_POLICY, material_status_policy

from .registry import EntityRegistry

logger = logging.getLogger(__name__)


def studio_settings() -> Dict[str, Any]:
    return dict(getattr(settings, 'STUDIO', {}))


def build_registry(overrides: Optional[Dict[str, Any]] = None, **kwargs) -> EntityRegistry:
    """
    Create a registry configured from settings.STUDIO.

    overrides take precedence over settings; extra keyword arguments
    (repositories, dispatcher) go straight to the registry.
    """
    studio = studio_settings()
    studio.update(overrides or {})

    policy_name = studio.get('MATERIAL_STATUS_POLICY', DEFAULT_MATERIAL_POLICY)
    try:
        policy = material_status_policy(policy_name)
    except ValueError as e:
        raise ImproperlyConfigured(f"STUDIO['MATERIAL_STATUS_POLICY']: {e}")

    limit = int(studio.get('DASHBOARD_TASK_LIMIT', DASHBOARD_TASK_LIMIT))
    if limit < 0:
        raise ImproperlyConfigured("STUDIO['DASHBOARD_TASK_LIMIT'] cannot be negative")

    registry = EntityRegistry(
        material_policy=policy,
        auto_complete=bool(studio.get('AUTO_COMPLETE_PROJECTS', False)),
        seed_checklist=bool(studio.get('SEED_DEFAULT_CHECKLIST', True)),
        dashboard_limit=limit,
        **kwargs,
    )
    logger.debug(
        f"Built registry: policy={policy.name} limit={limit} "
        f"auto_complete={registry.auto_complete}"
    )
    return registry
