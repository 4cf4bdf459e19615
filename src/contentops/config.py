# src/contentops/config.py

from dataclasses import dataclass, field

from contentops.cms.config import WebflowConfig
from contentops.diff.config import DiffConfig
from contentops.llms.config import LLMConfig
from contentops.search.config import SearchConfig


@dataclass(frozen=True)
class ContentOpsConfig:
    """Everything needed to wire a workflow against real services.

    Credentials are passed in by the host, never read from the environment.

    min_text_ratio: a rewrite shorter than this fraction of the original
    text is treated as truncated and discarded.
    prompts_dir: overrides the bundled prompt templates.
    """

    llm: LLMConfig
    search: SearchConfig
    cms: WebflowConfig
    diff: DiffConfig = field(default_factory=DiffConfig)
    max_searches: int = 3
    min_text_ratio: float = 0.5
    prompts_dir: str | None = None
