import pytest

from posts.parsing import InvalidDataError, expand_math, render_latex, render_tex


def fake_render(source, display_mode):
    if "\\badcmd" in source:
        raise ValueError(f"unknown command in {source!r}")
    kind = "block" if display_mode else "inline"
    return f'<math class="{kind}">{source}</math>'


def test_block_math_renders_as_display_mathml():
    result = expand_math("$$x^2$$")
    assert result.startswith("<math")
    assert 'display="block"' in result
    assert "<msup>" in result
    assert "$" not in result


def test_two_inline_spans_render_separately():
    result = expand_math("$a$ and $b$")
    assert result.count("<math") == 2
    assert " and " in result
    assert 'display="block"' not in result
    assert "$" not in result


def test_block_pass_runs_before_inline_pass():
    result = expand_math("$$x$$ then $y$", render=fake_render)
    assert result == '<math class="block">x</math> then <math class="inline">y</math>'


def test_failed_span_is_left_literal():
    assert expand_math("$$\\badcmd$$", render=fake_render) == "$$\\badcmd$$"


def test_failed_span_does_not_stop_other_spans():
    result = expand_math("$$\\badcmd$$ and $x$", render=fake_render)
    assert result == '$$\\badcmd$$ and <math class="inline">x</math>'


def test_undefined_command_is_left_literal():
    assert expand_math("$$\\badcmd$$") == "$$\\badcmd$$"
    assert expand_math("$\\badcmd + 1$") == "$\\badcmd + 1$"


def test_undefined_command_does_not_stop_other_spans():
    result = expand_math("$$x^2$$ and $\\nosuch{y}$")
    assert result.startswith("<math")
    assert result.endswith(" and $\\nosuch{y}$")


def test_render_tex_raises_on_undefined_command():
    with pytest.raises(ValueError):
        render_tex("\\frac{1}{\\badcmd}", True)


def test_empty_spans_are_left_alone():
    assert expand_math("costs $$ or $ $", render=fake_render) == "costs $$ or $ $"


def test_text_without_delimiters_is_unchanged():
    assert expand_math("<p>no math</p>", render=fake_render) == "<p>no math</p>"
    assert expand_math("", render=fake_render) == ""


def test_render_tex_inline_mode():
    result = render_tex("x+1", False)
    assert result.startswith("<math")
    assert 'display="inline"' in result


def test_escaped_markup_inside_math_stays_escaped():
    result = expand_math("$\\text{&lt;script&gt;}$")
    assert "<script" not in result


def test_render_latex_expands_payload_in_place():
    post = {"pid": 1, "content": "$x$"}
    assert render_latex(post, render=fake_render) is post
    assert post["content"] == '<math class="inline">x</math>'


def test_render_latex_passes_through_absent_payload():
    assert render_latex(None) is None


@pytest.mark.parametrize("payload", [["$x$"], {}, {"content": 5}, {"pid": 1}])
def test_render_latex_rejects_invalid_payload(payload):
    with pytest.raises(InvalidDataError):
        render_latex(payload)


def test_entities_in_source_are_decoded_before_rendering():
    result = expand_math("$a &lt; b$")
    assert "<mi>l</mi>" not in result
    assert "&amp;" not in result
    assert "<mi>a</mi>" in result
    assert "<mi>b</mi>" in result


def test_decoded_text_is_escaped_again_in_output():
    result = expand_math("$\\text{&lt;b&gt;bold&lt;/b&gt;}$")
    assert "<b>" not in result
    assert "</b>" not in result
    assert result.startswith("<math")
