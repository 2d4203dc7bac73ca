import pytest

from zurihttp.utils.placeholders import TemplateError, expand, expand_legacy, to_text


def test_expands_mustache_style_placeholders():
    assert expand("http://localhost/api/{{x}}", {"x": 1}) == "http://localhost/api/1"


def test_expands_placeholders_in_json_body():
    assert expand('{"y":{{y}}}', {"y": 2}) == '{"y":2}'


def test_missing_key_renders_empty():
    assert expand("a{{missing}}b", {}) == "ab"


def test_hyphenated_keys():
    assert expand("Bearer {{api-key}}", {"api-key": "k1"}) == "Bearer k1"
    assert expand("a{{missing-key}}b", {}) == "ab"


@pytest.mark.parametrize("template", ['{"css":"{#x"}', "{%x%}", "{# not a comment #}", "{x}"])
def test_brace_text_outside_tags_is_literal(template):
    assert expand(template, {"x": 1}) == template


def test_values_are_not_html_escaped():
    assert expand("{{q}}", {"q": "a<b & \"c\""}) == "a<b & \"c\""


def test_unbalanced_section_raises_template_error():
    with pytest.raises(TemplateError):
        expand("{{/orphan}}", {})


def test_legacy_placeholders():
    assert expand('{"y":${y}}', {"y": 2}) == '{"y":2}'


def test_unknown_legacy_placeholder_is_kept():
    assert expand("?a=${a}&b=${b}", {"a": "1"}) == "?a=1&b=${b}"


def test_legacy_pass_runs_on_output_of_first_pass():
    context = {"path": "/users/${user}", "user": "john.doe"}
    assert expand("http://host{{path}}", context) == "http://host/users/john.doe"


def test_values_are_rendered_canonically():
    context = {"flag": True, "off": False, "n": 1.5, "items": [1, 2], "nothing": None}
    assert expand("{{flag}} {{off}} {{n}} {{items}} [{{nothing}}]", context) == "true false 1.5 [1,2] []"
    assert expand_legacy("${flag}", context) == "true"


def test_nested_values_can_be_addressed():
    assert expand("{{order.id}}", {"order": {"id": 42}}) == "42"


def test_none_template_stays_none():
    assert expand(None, {"x": 1}) is None


def test_expansion_is_repeatable():
    context = {"x": 1, "y": "${x}"}
    template = "{{y}}-${x}"
    assert expand(template, context) == expand(template, context) == "1-1"


def test_to_text():
    assert to_text(None) == ""
    assert to_text({"a": 1}) == '{"a":1}'
    assert to_text(7) == "7"
