# src/contentops/cms/config.py

from dataclasses import dataclass


@dataclass(frozen=True)
class WebflowConfig:
    """Configuration for the Webflow CMS client.

    Field slugs default to those of Webflow's blog template.
    live: publish straight to the live site instead of staging the change.
    """

    api_token: str
    collection_id: str
    body_field: str = "post-body"
    summary_field: str = "post-summary"
    name_field: str = "name"
    live: bool = False
    timeout: float = 30.0
    max_retries: int = 3
