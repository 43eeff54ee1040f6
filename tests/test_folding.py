import threading

from markdown_preview.folding import FoldStateStore, content_block_id, positional_block_id


def test_lookup_registers_unseen_blocks_expanded(fold_store: FoldStateStore):
    assert fold_store.lookup("codeblock-1") is False
    assert "codeblock-1" in fold_store
    assert len(fold_store) == 1


def test_is_folded_does_not_register(fold_store: FoldStateStore):
    assert fold_store.is_folded("codeblock-1") is False
    assert "codeblock-1" not in fold_store


def test_toggle_unknown_block_folds_it(fold_store: FoldStateStore):
    assert fold_store.toggle("codeblock-1") is True
    assert fold_store.is_folded("codeblock-1") is True


def test_toggle_twice_restores(fold_store: FoldStateStore):
    fold_store.lookup("codeblock-1")
    fold_store.toggle("codeblock-1")
    fold_store.toggle("codeblock-1")

    assert fold_store.is_folded("codeblock-1") is False


def test_lookup_keeps_existing_state(fold_store: FoldStateStore):
    fold_store.set("codeblock-1", True)

    assert fold_store.lookup("codeblock-1") is True


def test_initial_state_and_snapshot_are_copies():
    initial = {"codeblock-1": True}
    store = FoldStateStore(initial)
    initial["codeblock-2"] = True

    snapshot = store.snapshot()
    snapshot["codeblock-3"] = False

    assert store.snapshot() == {"codeblock-1": True}


def test_clear_forgets_everything(fold_store: FoldStateStore):
    fold_store.toggle("a")
    fold_store.toggle("b")
    fold_store.clear()

    assert len(fold_store) == 0
    assert fold_store.is_folded("a") is False


def test_prune_expanded_drops_only_unseen_expanded_entries(fold_store: FoldStateStore):
    fold_store.lookup("kept")
    fold_store.lookup("stale")
    fold_store.set("folded", True)

    removed = fold_store.prune_expanded(["kept"])

    assert removed == 1
    assert fold_store.snapshot() == {"kept": False, "folded": True}


def test_concurrent_toggles_are_not_lost(fold_store: FoldStateStore):
    def worker():
        for _ in range(1000):
            fold_store.toggle("shared")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    # 4000 flips is an even number.
    assert fold_store.is_folded("shared") is False


def test_positional_block_id():
    assert positional_block_id(1) == "codeblock-1"
    assert positional_block_id(12) == "codeblock-12"


def test_content_block_id_is_stable_and_distinct():
    first = content_block_id("java", "public class X {}")

    assert first == content_block_id("java", "public class X {}")
    assert first != content_block_id("python", "public class X {}")
    assert first != content_block_id("java", "public class Y {}")
    assert first.startswith("codeblock-")
    assert len(first) == len("codeblock-") + 10


def test_content_block_id_occurrence_suffix():
    base = content_block_id("java", "x")

    assert content_block_id("java", "x", 1) == base
    assert content_block_id("java", "x", 2) == f"{base}-2"
