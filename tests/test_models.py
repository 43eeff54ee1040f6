from markdown_preview.models import CodeBlock, ListFrame, ListType, RenderContext, RenderState


def test_render_state_members():
    assert list(RenderState) == [
        RenderState.NORMAL,
        RenderState.IN_FENCED_CODE,
        RenderState.IN_TABLE,
    ]


def test_list_type_from_marker():
    assert ListType.from_marker("-") is ListType.UNORDERED
    assert ListType.from_marker("*") is ListType.UNORDERED
    assert ListType.from_marker("+") is ListType.UNORDERED
    assert ListType.from_marker("12.") is ListType.ORDERED


def test_list_type_values_are_tags():
    assert ListType.ORDERED.value == "ol"
    assert ListType.UNORDERED.value == "ul"


def test_list_frame_is_immutable_value():
    assert ListFrame(1, ListType.ORDERED) == ListFrame(1, ListType.ORDERED)
    assert ListFrame(1, ListType.ORDERED) != ListFrame(1, ListType.UNORDERED)


def test_render_context_defaults():
    ctx = RenderContext()

    assert ctx.state is RenderState.NORMAL
    assert ctx.output == []
    assert ctx.paragraph == []
    assert ctx.list_stack == []
    assert ctx.code_block is None
    assert ctx.block_ordinal == 0
    assert ctx.block_keys_seen == {}


def test_render_context_buffers_are_not_shared():
    first = RenderContext()
    second = RenderContext()

    first.emit("<hr>")

    assert second.output == []


def test_code_block_defaults():
    block = CodeBlock(block_id="codeblock-1", language_tag="java")

    assert block.folded is False
    assert block.line_count == 0
