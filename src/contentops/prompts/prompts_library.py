import logging
from pathlib import Path

import yaml

from .prompt import Prompt

logger = logging.getLogger(__name__)

PromptKey = tuple[str, str]


def default_prompts_dir() -> Path:
    """Directory of the prompts shipped with the package."""
    return Path(__file__).parent / "library"


class PromptsLibrary:
    """YAML prompt templates keyed by ``(name, version)``.

    The bundled prompts are always loaded. Prompts in ``overrides`` replace
    bundled ones with the same name and version, or add new ones. Within
    one directory, two files declaring the same name and version are an
    error.
    """

    def __init__(
        self,
        overrides: str | Path | None = None,
        *,
        include_bundled: bool = True,
    ) -> None:
        self._prompts: dict[PromptKey, Prompt] = {}
        directories = [default_prompts_dir()] if include_bundled else []
        if overrides:
            directories.append(Path(overrides))

        for directory in directories:
            if not directory.is_dir():
                raise FileNotFoundError(f"Prompts directory not found: {directory}")
            logger.info("Loading prompts from directory: %s", directory)
            self._prompts.update(self._load_directory(directory))
        logger.info("Loaded %d prompts", len(self._prompts))

    def get(self, name: str, version: str) -> Prompt:
        logger.debug("Getting prompt: name=%s, version=%s", name, version)
        try:
            return self._prompts[(name, version)]
        except KeyError:
            logger.error("Prompt not found: name=%s, version=%s", name, version)
            raise KeyError(f"Prompt '{name}' version '{version}' not found")

    def list(self) -> list[PromptKey]:
        return sorted(self._prompts)

    def _load_directory(self, directory: Path) -> dict[PromptKey, Prompt]:
        loaded: dict[PromptKey, Prompt] = {}
        sources: dict[PromptKey, Path] = {}
        for file_path in sorted(directory.glob("*.yaml")):
            prompt = self._load_prompt(file_path)
            key = (prompt.name, prompt.version)
            if key in loaded:
                raise ValueError(
                    f"Prompt '{prompt.name}' version '{prompt.version}' is defined "
                    f"in both {sources[key].name} and {file_path.name}"
                )
            if key in self._prompts:
                logger.info("Overriding prompt %s v%s from %s", *key, file_path)
            loaded[key] = prompt
            sources[key] = file_path
            logger.debug("Loaded prompt: %s v%s from %s", *key, file_path)
        return loaded

    def _load_prompt(self, file_path: Path) -> Prompt:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return Prompt.model_validate(data)
