from .base import CMSClient, CMSItem
from .config import WebflowConfig
from .webflow import WebflowCMSClient

__all__ = [
    "CMSClient",
    "CMSItem",
    "WebflowCMSClient",
    "WebflowConfig",
]
