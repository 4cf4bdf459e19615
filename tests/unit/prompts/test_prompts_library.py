from pathlib import Path

import pytest

from contentops.prompts.prompt import Prompt
from contentops.prompts.prompts_library import PromptsLibrary, default_prompts_dir


@pytest.fixture
def prompts_dir(tmp_path: Path) -> Path:
    """Create a temp directory with sample YAML prompt files."""
    (tmp_path / "summarize.yaml").write_text(
        """name: summarize
version: "1"
description: Summarize a blog post
inputs:
  text: The post text
template: "Summarize this post: {{ text }}"
"""
    )

    (tmp_path / "summarize_v2.yaml").write_text(
        """name: summarize
version: "2"
description: Summarize a blog post for a given audience
inputs:
  text: The post text
  audience: Who the summary is for
system: You write short summaries.
template: |
  Summarize this post for {{ audience }}:
  {{ text }}
"""
    )

    (tmp_path / "headline.yaml").write_text(
        """name: headline
version: "1"
description: Suggest a headline
inputs:
  text: The post text
template: "Suggest a headline for: {{ text }}"
"""
    )

    # Ignored: not a .yaml file
    (tmp_path / "notes.txt").write_text("not a prompt")

    return tmp_path


class TestPromptsLibrary:
    def test_loads_prompts_from_directory(self, prompts_dir: Path) -> None:
        """Test loading every YAML prompt in a directory."""
        library = PromptsLibrary(prompts_dir, include_bundled=False)

        assert len(library.list()) == 3

    def test_get_prompt_by_name_and_version(self, prompts_dir: Path) -> None:
        """Test getting a prompt by name and version."""
        library = PromptsLibrary(prompts_dir, include_bundled=False)

        prompt = library.get("summarize", "2")

        assert prompt.name == "summarize"
        assert prompt.version == "2"
        assert prompt.system == "You write short summaries."
        assert set(prompt.inputs) == {"text", "audience"}

    def test_system_defaults_to_empty(self, prompts_dir: Path) -> None:
        """Test that system defaults to an empty string."""
        library = PromptsLibrary(prompts_dir, include_bundled=False)

        assert library.get("headline", "1").system == ""

    def test_get_raises_keyerror_for_unknown_prompt(self, prompts_dir: Path) -> None:
        """Test that an unknown prompt raises KeyError."""
        library = PromptsLibrary(prompts_dir, include_bundled=False)

        with pytest.raises(KeyError, match="Prompt 'unknown' version '1' not found"):
            library.get("unknown", "1")

    def test_get_raises_keyerror_for_unknown_version(self, prompts_dir: Path) -> None:
        """Test that an unknown version raises KeyError."""
        library = PromptsLibrary(prompts_dir, include_bundled=False)

        with pytest.raises(KeyError, match="Prompt 'summarize' version '9' not found"):
            library.get("summarize", "9")

    def test_list_is_sorted(self, prompts_dir: Path) -> None:
        """Test that list returns sorted name/version pairs."""
        library = PromptsLibrary(prompts_dir, include_bundled=False)

        assert library.list() == [
            ("headline", "1"),
            ("summarize", "1"),
            ("summarize", "2"),
        ]

    def test_empty_directory_loads_no_prompts(self, tmp_path: Path) -> None:
        """Test that an empty directory loads no prompts."""
        library = PromptsLibrary(tmp_path, include_bundled=False)

        assert library.list() == []

    def test_invalid_prompt_file_raises(self, tmp_path: Path) -> None:
        """Test that a prompt file with unknown keys is rejected."""
        (tmp_path / "broken.yaml").write_text(
            """name: broken
version: "1"
description: Has an unknown key
inputs: {}
template: hi
temperature: 0.2
"""
        )

        with pytest.raises(ValueError):
            PromptsLibrary(tmp_path, include_bundled=False)


class TestBundledPrompts:
    def test_default_directory_is_used(self) -> None:
        """Test that the bundled prompts load by default."""
        library = PromptsLibrary()

        assert ("fact_check_queries", "1") in library.list()
        assert ("fact_check_rewrite", "1") in library.list()
        assert default_prompts_dir().is_dir()

    def test_query_prompt_renders(self) -> None:
        """Test rendering the bundled query prompt."""
        prompt = PromptsLibrary().get("fact_check_queries", "1")

        rendered = prompt.render(
            title="Pricing", text="Plans start at $49.", max_queries="3", instructions=""
        )

        assert "Plans start at $49." in rendered
        assert "{{" not in rendered
        assert prompt.system

    def test_rewrite_prompt_renders(self) -> None:
        """Test rendering the bundled rewrite prompt."""
        prompt = PromptsLibrary().get("fact_check_rewrite", "1")

        rendered = prompt.render(
            title="Pricing",
            html="<p>Plans start at $49.</p>",
            evidence="(no search results)",
            instructions="Keep it short",
        )

        assert "<p>Plans start at $49.</p>" in rendered
        assert "Keep it short" in rendered
        assert "{{" not in rendered


class TestOverrides:
    def test_override_replaces_bundled_prompt(self, tmp_path: Path) -> None:
        """Test that an override replaces the bundled prompt of the same version."""
        (tmp_path / "queries.yaml").write_text(
            """name: fact_check_queries
version: "1"
description: House style queries
inputs:
  title: Title
  text: Text
  max_queries: Max
  instructions: Extra
template: "Only check prices in {{ title }}"
"""
        )

        library = PromptsLibrary(tmp_path)

        prompt = library.get("fact_check_queries", "1")
        assert prompt.description == "House style queries"
        assert ("fact_check_rewrite", "1") in library.list()

    def test_override_adds_new_prompt(self, prompts_dir: Path) -> None:
        """Test that override prompts are added to the bundled ones."""
        library = PromptsLibrary(prompts_dir)

        assert len(library.list()) == 5

    def test_duplicate_in_one_directory_raises(self, tmp_path: Path) -> None:
        """Test that two files with the same name and version raise ValueError."""
        body = """name: dup
version: "1"
description: d
inputs: {}
template: t
"""
        (tmp_path / "a.yaml").write_text(body)
        (tmp_path / "b.yaml").write_text(body)

        with pytest.raises(ValueError, match="defined in both a.yaml and b.yaml"):
            PromptsLibrary(tmp_path)

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        """Test that a missing override directory raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Prompts directory not found"):
            PromptsLibrary(tmp_path / "nope")


class TestPrompt:
    def _prompt(self, template: str, **inputs: str) -> Prompt:
        return Prompt(
            name="p",
            version="1",
            description="test",
            inputs=inputs or {"text": "body"},
            template=template,
        )

    def test_render_fills_placeholders(self) -> None:
        """Test that placeholders are filled with and without spaces."""
        prompt = self._prompt("A {{text}} and {{ text }}")

        assert prompt.render(text="b") == "A b and b"

    def test_render_missing_inputs_raises(self) -> None:
        """Test that missing inputs raise ValueError."""
        prompt = self._prompt("{{ a }} {{ b }}", a="first", b="second")

        with pytest.raises(ValueError, match="Prompt 'p' is missing inputs: a, b"):
            prompt.render()

    def test_undeclared_placeholder_is_kept(self) -> None:
        """Test that undeclared placeholders are kept as written."""
        prompt = self._prompt('{{ text }} -> {"content": "{{ html }}"}')

        assert prompt.render(text="x") == 'x -> {"content": "{{ html }}"}'

    def test_extra_fields_are_rejected(self) -> None:
        """Test that unknown fields are rejected."""
        with pytest.raises(ValueError):
            Prompt(
                name="p",
                version="1",
                description="d",
                inputs={},
                template="t",
                model="gpt-4o",
            )
