"""Unit tests for TemplateBridge."""

from unittest.mock import Mock

from mailcraft.editor.bridge import TemplateBridge
from mailcraft.editor.template_editor import TemplateEditor
from mailcraft.models.blocks import create_divider_block
from mailcraft.models.template import EmailTemplate


class TestAddBlock:
    """Test single-block insertion."""

    def test_add_block_calls_editor_once_with_same_block(self, sample_blocks):
        """The exact block is handed over once, with its id intact."""
        on_add = Mock()
        on_set = Mock()
        bridge = TemplateBridge(on_add_block=on_add, on_set_template=on_set)

        assert bridge.add_block(sample_blocks[1]) is True

        on_add.assert_called_once_with(sample_blocks[1])
        on_set.assert_not_called()

    def test_adding_twice_remints_id(self, sample_blocks):
        """The second insertion gets a new id but the same payload."""
        on_add = Mock()
        bridge = TemplateBridge(on_add_block=on_add, on_set_template=Mock())

        bridge.add_block(sample_blocks[0])
        bridge.add_block(sample_blocks[0])

        first = on_add.call_args_list[0].args[0]
        second = on_add.call_args_list[1].args[0]
        assert first.id == sample_blocks[0].id
        assert second.id != first.id
        assert second.content == first.content
        assert second.type == first.type

    def test_id_already_in_template_is_reminted(self, sample_blocks):
        """Ids from the starting snapshot count as taken."""
        on_add = Mock()
        template = EmailTemplate(blocks=(sample_blocks[0],))
        bridge = TemplateBridge(on_add_block=on_add, on_set_template=Mock(), current_template=template)

        bridge.add_block(sample_blocks[0])

        assert on_add.call_args.args[0].id != sample_blocks[0].id

    def test_editor_failure_returns_false(self, sample_blocks):
        """A raising callback is reported as a failed insertion."""
        on_add = Mock(side_effect=RuntimeError("editor is read-only"))
        bridge = TemplateBridge(on_add_block=on_add, on_set_template=Mock())

        assert bridge.add_block(sample_blocks[0]) is False
        on_add.assert_called_once()

    def test_failed_insertion_does_not_reserve_id(self, sample_blocks):
        """After a failure the same block is retried with its own id."""
        on_add = Mock(side_effect=[RuntimeError("busy"), None])
        bridge = TemplateBridge(on_add_block=on_add, on_set_template=Mock())

        bridge.add_block(sample_blocks[0])
        bridge.add_block(sample_blocks[0])

        assert on_add.call_args.args[0].id == sample_blocks[0].id


class TestApplyAll:
    """Test whole-template replacement."""

    def test_apply_all_passes_blocks_in_order(self, sample_blocks):
        """One call, same blocks, same order."""
        on_add = Mock()
        on_set = Mock()
        bridge = TemplateBridge(on_add_block=on_add, on_set_template=on_set)

        assert bridge.apply_all(tuple(sample_blocks)) is True

        on_set.assert_called_once_with(sample_blocks)
        on_add.assert_not_called()

    def test_apply_all_empty_is_noop(self):
        """Nothing to apply means no editor call."""
        on_set = Mock()
        bridge = TemplateBridge(on_add_block=Mock(), on_set_template=on_set)

        assert bridge.apply_all([]) is False
        on_set.assert_not_called()

    def test_apply_all_failure_returns_false(self, sample_blocks):
        """A raising callback is reported as a failed replacement."""
        bridge = TemplateBridge(
            on_add_block=Mock(),
            on_set_template=Mock(side_effect=ValueError("rejected")),
        )

        assert bridge.apply_all(sample_blocks) is False

    def test_add_after_apply_remints(self, sample_blocks):
        """Blocks applied as a whole are in the template afterwards."""
        on_add = Mock()
        bridge = TemplateBridge(on_add_block=on_add, on_set_template=Mock())

        bridge.apply_all(sample_blocks)
        bridge.add_block(sample_blocks[2])

        assert on_add.call_args.args[0].id != sample_blocks[2].id

    def test_apply_all_forgets_replaced_ids(self, sample_blocks):
        """Ids that were replaced away are free again."""
        on_add = Mock()
        divider = create_divider_block()
        bridge = TemplateBridge(on_add_block=on_add, on_set_template=Mock())

        bridge.add_block(divider)
        bridge.apply_all(sample_blocks)
        bridge.add_block(divider)

        assert on_add.call_args.args[0].id == divider.id


class TestWithEditor:
    """Test the bridge wired to a real TemplateEditor."""

    def test_repeated_add_keeps_editor_ids_unique(self, sample_blocks):
        """The editor never sees a duplicate id."""
        editor = TemplateEditor()
        bridge = TemplateBridge(editor.add_block, editor.set_blocks, editor.snapshot())
        editor.subscribe(bridge.sync)

        assert bridge.add_block(sample_blocks[0])
        assert bridge.add_block(sample_blocks[0])

        template = editor.snapshot()
        assert len(template.blocks) == 2
        assert len(template.block_ids) == 2

    def test_apply_then_add(self, sample_blocks):
        """Apply replaces, add appends to the end."""
        editor = TemplateEditor()
        bridge = TemplateBridge(editor.add_block, editor.set_blocks, editor.snapshot())
        editor.subscribe(bridge.sync)

        bridge.apply_all(sample_blocks[:2])
        bridge.add_block(sample_blocks[2])

        assert [b.id for b in editor.snapshot().blocks] == [b.id for b in sample_blocks]

    def test_sync_tracks_host_edits(self, sample_blocks):
        """Blocks the host added on its own are known after sync."""
        editor = TemplateEditor()
        bridge = TemplateBridge(editor.add_block, editor.set_blocks, editor.snapshot())
        editor.subscribe(bridge.sync)

        editor.add_block(sample_blocks[0])

        assert bridge.add_block(sample_blocks[0])
        assert len(editor.snapshot().block_ids) == 2
