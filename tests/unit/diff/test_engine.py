from unittest.mock import MagicMock

import pytest

from contentops.diff.annotator import MARKER_ATTR, strip, wrap
from contentops.diff.config import DiffConfig
from contentops.diff.engine import diff_html, rediff
from contentops.diff.segmenter import normalize_text
from contentops.observability import names

PAIRS = [
    ("<p>Hello world</p>", "<p>Hello world</p><p>This is a brand new sentence about pricing.</p>"),
    ("<p>Our price is $59 per month.</p>", "<p>Our price is $79 per month.</p>"),
    ("", "<h2>A heading that is new</h2>Loose text that was added here<p>x</p>"),
    (
        "<p>Compare plans.</p>",
        "<p>Compare all of our plans below.</p><table><tr><td>$79</td></tr></table>",
    ),
    ("<p>Unchanged paragraph of body text.</p>", ""),
    (
        "<p>Intro</p>",
        "<p>Intro</p>"
        '<div style="border-left: 4px solid #10b981">Callout that the author wrote</div>',
    ),
]


class TestDiffHtml:
    def test_pure_addition_scenario(self) -> None:
        """Test that an added paragraph is wrapped."""
        result = diff_html(
            "<p>Hello world</p>",
            "<p>Hello world</p><p>This is a brand new sentence about pricing.</p>",
        )

        assert result.change_count == 1
        assert result.annotated_html == (
            "<p>Hello world</p>"
            + wrap("<p>This is a brand new sentence about pricing.</p>")
        )

    def test_reordering_scenario(self) -> None:
        """Test that reordered paragraphs produce no wrappers."""
        result = diff_html("<p>A</p><p>B</p>", "<p>B</p><p>A</p>")

        assert result.change_count == 0
        assert result.annotated_html == "<p>B</p><p>A</p>"

    def test_protected_table_scenario(self) -> None:
        """Test that an added table is not wrapped."""
        table = "<table><tr><th>Plan</th><th>Price per month</th></tr></table>"

        result = diff_html("<p>Plans</p>", f"<p>Plans</p>{table}")

        assert result.change_count == 0
        assert MARKER_ATTR not in result.annotated_html
        assert result.annotated_html.endswith(table)

    def test_paraphrase_scenario(self) -> None:
        """Test that a changed price wraps the paragraph."""
        result = diff_html(
            "<p>Our price is $59 per month.</p>", "<p>Our price is $79 per month.</p>"
        )

        assert result.change_count == 1
        assert result.annotated_html == wrap("<p>Our price is $79 per month.</p>")

    def test_identity_has_no_changes(self) -> None:
        """Test that identical documents have no changes."""
        html = (
            "<h1>Title of the post</h1><p>Some body text for the post.</p>"
            '<figure><img src="a.png"></figure><ul><li>A list item that is long</li></ul>'
        )

        result = diff_html(html, html)

        assert result.change_count == 0
        assert result.annotated_html == result.clean_html == html

    def test_config_threshold_is_used(self) -> None:
        """Test that DiffConfig.threshold reaches the detector."""
        result = diff_html(
            "<p>Price: $5</p>", "<p>Price: $6</p>", config=DiffConfig(threshold=5)
        )

        assert result.change_count == 1

    def test_records_metrics(self) -> None:
        """Test that duration and block gauges are recorded."""
        metrics_hook = MagicMock()

        diff_html(
            "<p>Hello world</p>",
            "<p>Hello world</p><p>This is a brand new sentence about pricing.</p>",
            metrics_hook=metrics_hook,
        )

        metrics_hook.record_latency.assert_called_once()
        assert metrics_hook.record_latency.call_args.args[0] == names.DIFF_DURATION
        metrics_hook.record_gauge.assert_any_call(names.DIFF_BLOCKS_TOTAL, 2)
        metrics_hook.record_gauge.assert_any_call(names.DIFF_BLOCKS_CHANGED, 1)

    def test_repeated_calls_are_identical(self) -> None:
        """Test that repeated calls give identical results."""
        original, candidate = PAIRS[0]

        assert diff_html(original, candidate) == diff_html(original, candidate)


class TestRoundTrip:
    @pytest.mark.parametrize("original,candidate", PAIRS)
    def test_strip_restores_candidate(self, original: str, candidate: str) -> None:
        """Test that stripping the annotation gives back the clean candidate."""
        result = diff_html(original, candidate)

        assert strip(result.annotated_html) == result.clean_html
        assert normalize_text(strip(result.annotated_html)) == normalize_text(candidate)

    @pytest.mark.parametrize("original,candidate", PAIRS)
    def test_protected_blocks_are_never_wrapped(
        self, original: str, candidate: str
    ) -> None:
        """Test that protected blocks are never wrapped."""
        result = diff_html(original, candidate)

        for entry in result.entries:
            if entry.block.is_protected:
                assert not entry.changed
                assert wrap(entry.block.serialized_html) not in result.annotated_html


class TestRediff:
    def test_reverting_an_edit_clears_the_change(self) -> None:
        """Test that undoing an edit clears the change."""
        original = "<p>Our price is $59 per month.</p>"
        first = diff_html(original, "<p>Our price is $79 per month.</p>")

        edited = first.annotated_html.replace("$79", "$59")
        second = rediff(original, edited)

        assert second.change_count == 0
        assert second.clean_html == original

    def test_user_added_paragraph_is_flagged(self) -> None:
        """Test that a paragraph added during review is flagged."""
        original = "<p>Our price is $59 per month.</p>"
        edited = original + "<p>The user wrote this extra paragraph.</p>"

        result = rediff(original, edited)

        assert result.change_count == 1
        assert result.entries[1].changed

    def test_records_strip_latency(self) -> None:
        """Test that rediff records strip and diff latency."""
        metrics_hook = MagicMock()

        rediff("<p>a</p>", "<p>a</p>", metrics_hook=metrics_hook)

        recorded = [c.args[0] for c in metrics_hook.record_latency.call_args_list]
        assert names.STRIP_DURATION in recorded
        assert names.DIFF_DURATION in recorded

    def test_author_callout_survives_rediff(self) -> None:
        """Test that a wrapper-coloured callout keeps its markup across edits."""
        callout = (
            '<div style="border-left: 4px solid #10b981">'
            "Callout that the author wrote</div>"
        )
        original = f"<p>Intro</p>{callout}"

        first = diff_html(original, original)
        second = rediff(original, first.annotated_html)

        assert second.clean_html == original
        assert second.change_count == 0
