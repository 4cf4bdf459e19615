from .prompt import Prompt
from .prompts_library import PromptsLibrary, default_prompts_dir

__all__ = [
    "Prompt",
    "PromptsLibrary",
    "default_prompts_dir",
]
