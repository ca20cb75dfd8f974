"""Tests for frontmatter reading and encoding."""

from datetime import date

from chatplan.frontmatter import (
    encode_frontmatter,
    parse_front_matter,
    read_frontmatter,
    read_frontmatter_file,
    serialize_value,
)


def test_serialize_value_string():
    assert serialize_value("hello") == '"hello"'


def test_serialize_value_escapes_backslash():
    assert serialize_value("C:\\path") == '"C:\\\\path"'


def test_serialize_value_escapes_quotes():
    assert serialize_value('say "hi"') == '"say \\"hi\\""'


def test_serialize_value_bool_and_numbers():
    assert serialize_value(True) == "true"
    assert serialize_value(False) == "false"
    assert serialize_value(42) == "42"
    assert serialize_value(3.14) == "3.14"


def test_serialize_value_date():
    assert serialize_value(date(2026, 2, 25)) == "2026-02-25"


def test_encode_string_fields():
    result = encode_frontmatter({"title": "My Plan", "tldr": "A summary"})
    assert result == 'title: "My Plan"\ntldr: "A summary"'


def test_encode_escaped_title():
    assert encode_frontmatter({"title": 'say "hi"'}) == 'title: "say \\"hi\\""'


def test_encode_tags_inline():
    assert encode_frontmatter({"tags": ["java", "gsoc"]}) == 'tags: ["java", "gsoc"]'


def test_encode_empty_tags():
    assert encode_frontmatter({"tags": []}) == "tags: []"


def test_encode_milestones_block():
    result = encode_frontmatter(
        {
            "milestones": [
                {"title": "Phase 1", "weeks": "Weeks 1-4", "status": "complete"},
                {"title": "Phase 2", "weeks": "Weeks 5-8", "status": "not-started"},
            ]
        }
    )
    assert result.split("\n") == [
        "milestones:",
        '  - title: "Phase 1"',
        '    weeks: "Weeks 1-4"',
        '    status: "complete"',
        '  - title: "Phase 2"',
        '    weeks: "Weeks 5-8"',
        '    status: "not-started"',
    ]


def test_encode_action_items_booleans_bare():
    result = encode_frontmatter({"action_items": [{"task": "Email mentor", "done": False}]})
    assert result == 'action_items:\n  - task: "Email mentor"\n    done: false'


def test_encode_omits_none():
    result = encode_frontmatter({"title": "T", "missing": None, "alsoMissing": None})
    assert "missing" not in result
    assert "alsoMissing" not in result


def test_encode_keeps_caller_order():
    result = encode_frontmatter({"b": "2", "a": "1"})
    assert result == 'b: "2"\na: "1"'


def test_read_frontmatter_scalars():
    text = '---\ntitle: "Hello"\ndate: 2026-02-25\ntldr: plain text\n---\n\nBody'
    assert read_frontmatter(text) == {"title": "Hello", "date": "2026-02-25", "tldr": "plain text"}


def test_read_frontmatter_no_header():
    assert read_frontmatter("# Just markdown") == {}


def test_read_frontmatter_unclosed():
    assert read_frontmatter("---\ntitle: x\n\nBody") == {}


def test_read_frontmatter_skips_nested_lines():
    text = '---\ntitle: "P"\nmilestones:\n  - title: "Phase 1"\n    weeks: "W1"\n---\n'
    fm = read_frontmatter(text)
    assert fm["title"] == "P"
    assert fm["milestones"] == ""
    assert "weeks" not in fm


def test_read_frontmatter_does_not_unescape():
    text = '---\ntitle: "say \\"hi\\""\n---\n'
    assert read_frontmatter(text)["title"] == 'say \\"hi\\"'


def test_read_frontmatter_value_with_colon():
    text = '---\ntldr: "time: 10:30"\n---\n'
    assert read_frontmatter(text)["tldr"] == "time: 10:30"


def test_read_frontmatter_file(tmp_path):
    path = tmp_path / "a.mdx"
    path.write_text('---\ntitle: "From file"\n---\n\nBody\n')
    assert read_frontmatter_file(path) == {"title": "From file"}


def test_scalar_roundtrip_through_lightweight_reader():
    fields = {"title": "Plan", "count": 3, "done": True, "tldr": "Short"}
    decoded = read_frontmatter(f"---\n{encode_frontmatter(fields)}\n---\n")
    assert decoded == {"title": "Plan", "count": "3", "done": "true", "tldr": "Short"}


def test_parse_front_matter_records():
    text = (
        '---\ntitle: "P"\ntags: ["a", "b"]\nmilestones:\n'
        '  - title: "Phase 1"\n    weeks: "Weeks 1-4"\n    status: "in-progress"\n---\n\nBody\n'
    )
    body, meta = parse_front_matter(text)
    assert meta["tags"] == ["a", "b"]
    assert meta["milestones"] == [{"title": "Phase 1", "weeks": "Weeks 1-4", "status": "in-progress"}]
    assert body == "\nBody\n"


def test_parse_front_matter_unescapes():
    title = 'say "hi" C:\\x'
    text = "---\n" + encode_frontmatter({"title": title}) + "\n---\n"
    _, meta = parse_front_matter(text)
    assert meta["title"] == title


def test_parse_front_matter_invalid_yaml():
    text = "---\ninvalid: yaml: content: [\n---\nBody\n"
    body, meta = parse_front_matter(text)
    assert meta == {}
    assert body == text


def test_parse_front_matter_missing():
    body, meta = parse_front_matter("No header here")
    assert meta == {}
    assert body == "No header here"


def test_parse_front_matter_non_mapping():
    body, meta = parse_front_matter("---\n- just\n- a list\n---\nBody")
    assert meta == {}
