import re

from pydantic import BaseModel, ConfigDict

_PLACEHOLDER_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class Prompt(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    version: str
    description: str
    inputs: dict[str, str]
    template: str
    system: str = ""

    def render(self, **values: str) -> str:
        """Fill ``{{ name }}`` placeholders in the template.

        Every declared input must be supplied. Placeholders that are not
        declared inputs are left as written.
        """
        missing = sorted(set(self.inputs) - set(values))
        if missing:
            raise ValueError(
                f"Prompt '{self.name}' is missing inputs: {', '.join(missing)}"
            )
        return _PLACEHOLDER_RE.sub(
            lambda m: str(values[m.group(1)]) if m.group(1) in self.inputs else m.group(0),
            self.template,
        )
