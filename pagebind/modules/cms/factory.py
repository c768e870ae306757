from typing import Optional

from ..logging import BaseLogger
from ..request.http_client import HttpClient
from .base import CmsClient
from .config import CmsConfig, CmsType
from .memory import InMemoryCmsClient
from .rest import RestCmsClient


def create_cms_client(config: CmsConfig, http: HttpClient, logger: BaseLogger) -> CmsClient:
    """
    Create a CMS client based on configuration.

    Args:
        config: CMS configuration
        http: HTTP client used by the REST implementation
        logger: Logger instance

    Returns:
        CmsClient: The created client
    """
    if config.type == CmsType.REST:
        logger.log_debug(f"Using Payload REST CMS at {config.base_url}")
        return RestCmsClient(config.base_url or "", http)

    logger.log_debug(f"Using in-memory CMS with {len(config.collections)} collections")
    return InMemoryCmsClient(config.collections)


def create_fallback_cms_client(config: CmsConfig) -> Optional[CmsClient]:
    """Mock collections that stand in for an unreachable REST CMS, if any are configured."""
    if config.type == CmsType.REST and config.collections:
        return InMemoryCmsClient(config.collections)
    return None
