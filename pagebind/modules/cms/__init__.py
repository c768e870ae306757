from .base import CmsClient, CmsError, DocumentNotFoundError, FindResult
from .config import CmsConfig, CmsType
from .factory import create_cms_client, create_fallback_cms_client
from .memory import InMemoryCmsClient
from .rest import RestCmsClient

__all__ = [
    'CmsClient', 'CmsError', 'DocumentNotFoundError', 'FindResult',
    'CmsConfig', 'CmsType', 'create_cms_client', 'create_fallback_cms_client',
    'InMemoryCmsClient', 'RestCmsClient'
]
