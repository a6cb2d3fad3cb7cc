import pytest

from report_creation import (
    MarkupSyntaxError,
    Report,
    Section,
    bullets,
    code,
    figure,
    find_syntax_issues,
    image,
    link,
    numbered,
    paragraph,
    raw,
    styled,
    table,
)


def test_rendered_report_with_everything_enabled_is_balanced() -> None:
    report = (
        Report("Everything [Everywhere]")
        .author('Every "Tester"')
        .header("Universal Header")
        .footer("Page {page} of {pages}")
        .with_heading_numbering()
        .with_contents_table()
        .with_figure_table()
        .add_front_matter(paragraph(styled("Front matter", fill="blue")))
        .add_section(
            Section("Overview")
            .add_block(paragraph("Overview body with (parens) and https://example.com"))
            .add_block(bullets(["Item A", "Item ]B["]))
            .add_block(numbered(["Step 1", "Step 2"]))
            .add_block(table(["Key", "Value"], [["X", "[Y]"]]))
            .add_block(link("https://docs.example.com", "Docs"))
            .add_subsection(
                Section("Details")
                .add_block(code('echo "details" ) ]', "bash"))
                .add_block(figure(image("./diagram.svg", width="80%"), "Everything diagram"))
            )
        )
    )

    markup, _ = report.render_validated()

    assert find_syntax_issues(markup) == []


def test_reports_unclosed_delimiters() -> None:
    issues = find_syntax_issues("[#unclosed(")

    assert issues
    assert any("unclosed" in issue.message for issue in issues)


def test_reports_positions() -> None:
    issues = find_syntax_issues("ok\n[#f(")

    assert [(issue.line, issue.column) for issue in issues] == [(2, 1), (2, 4)]


def test_reports_unexpected_closing_bracket() -> None:
    issues = find_syntax_issues("text ] more")

    assert len(issues) == 1
    assert issues[0].message == "unexpected closing delimiter ']'"


def test_reports_unclosed_string_and_raw() -> None:
    assert any(issue.message == "unclosed string" for issue in find_syntax_issues('#set text(font: "Inter)'))
    assert [issue.message for issue in find_syntax_issues("```python\nprint()\n")] == ["unclosed raw text"]


def test_ignores_delimiters_in_plain_markup_and_escapes() -> None:
    assert find_syntax_issues("a (b and c) d } \\[ \\] // note [\n/* ( */ $x [$") == []


def test_render_validated_raises_with_issues() -> None:
    report = Report("Broken").add_section(Section("Faulty").add_block(raw("[#unclosed(")))

    with pytest.raises(MarkupSyntaxError) as excinfo:
        report.render_validated()

    assert any("unclosed" in issue.message for issue in excinfo.value.issues)
