"""Tests for the mutation bridge and the write-once ``mutate`` capability."""

import pytest
from mutant_json import (
    MalformedPointer,
    MutationBridge,
    Mutator,
    Outcome,
    PatchOp,
    ResumeHint,
    UnknownOperation,
    apply_operation,
)


def make_bridge(**kwargs):
    return MutationBridge(apply_operation, **kwargs)


class TestMutator:
    """Write-once capture."""

    def test_unused(self):
        """A fresh capability has issued nothing."""
        mutate = Mutator("/a")

        assert not mutate.issued
        assert mutate.request is None

    def test_first_call_wins(self):
        """Only the first request is kept."""
        mutate = Mutator("/a")
        mutate({"value": 1})
        mutate({"value": 2})

        assert mutate.request == {"value": 1}

    def test_closed_capability_raises(self):
        """Calls after ``close`` raise."""
        mutate = Mutator("/a")
        mutate.close()

        with pytest.raises(RuntimeError):
            mutate({"value": 1})


class TestMutationBridge:
    """Synchronous processing of one entry."""

    def test_no_mutation_returns_none(self):
        """A callback that never mutates yields no outcome."""
        calls = []
        result = make_bridge().process(0, "/a", {"a": 0}, lambda *args: calls.append(args))

        assert result is None
        assert len(calls) == 1

    def test_callback_arguments(self):
        """The callback gets ``(mutate, value, pointer, document)``."""
        seen = {}

        def process(mutate, value, pointer, document):
            seen.update(mutate=mutate, value=value, pointer=pointer, document=document)

        document = {"a": 0}
        make_bridge().process(0, "/a", document, process)

        assert isinstance(seen["mutate"], Mutator)
        assert (seen["value"], seen["pointer"], seen["document"]) == (0, "/a", document)

    def test_replace_returns_new_document(self):
        """The patched document is new; the input is untouched."""
        document = {"a": 0}
        outcome = make_bridge().process(0, "/a", document, lambda mutate, *_: mutate({"value": 5}))

        assert outcome == Outcome({"a": 5}, None)
        assert document == {"a": 0}

    def test_container_result_produces_hint(self):
        """A container written at the target becomes the resume hint."""
        outcome = make_bridge().process(
            "x", "/a", {"a": "x"},
            lambda mutate, value, *_: mutate({"value": {"nested": value}}),
        )

        assert outcome.hint == ResumeHint("/a", {"nested": "x"})
        assert outcome.hint.value is outcome.document["a"]

    def test_remove_never_produces_hint(self):
        """Removal has nothing to resume into."""
        outcome = make_bridge().process(
            {"k": 1}, "/a", {"a": {"k": 1}, "b": 2},
            lambda mutate, *_: mutate({"op": "remove"}),
        )

        assert outcome == Outcome({"b": 2}, None)

    def test_hint_uses_patch_target(self):
        """The hint follows the patch path, not the entry pointer."""
        outcome = make_bridge().process(
            0, "/a", {"a": 0},
            lambda mutate, *_: mutate({"op": "add", "path": "/b", "value": [1]}),
        )

        assert outcome.hint == ResumeHint("/b", [1])

    def test_repeated_mutate_is_ignored(self):
        """A second ``mutate`` inside the same callback has no effect."""
        def process(mutate, value, pointer, document):
            mutate({"value": 1})
            mutate({"value": 2})

        assert make_bridge().process(0, "/a", {"a": 0}, process).document == {"a": 1}

    def test_mutate_after_entry_raises(self):
        """A leaked capability cannot be used later."""
        kept = []
        make_bridge().process(0, "/a", {"a": 0}, lambda mutate, *_: kept.append(mutate))

        with pytest.raises(RuntimeError):
            kept[0]({"value": 1})

    def test_batch_applies_every_request(self):
        """Every request of a sequence is applied in order."""
        outcome = make_bridge().process(
            0, "/a", {"a": 0},
            lambda mutate, *_: mutate([{"value": 1}, {"op": "add", "path": "/b", "value": {}}]),
        )

        assert outcome.document == {"a": 1, "b": {}}
        assert outcome.hint == ResumeHint("/b", {})

    def test_first_only_mode(self):
        """``batch=False`` keeps only the first request."""
        outcome = make_bridge(batch=False).process(
            0, "/a", {"a": 0},
            lambda mutate, *_: mutate([{"value": 1}, {"op": "add", "path": "/b", "value": 2}]),
        )

        assert outcome.document == {"a": 1}

    def test_empty_sequence_is_no_mutation(self):
        """``mutate([])`` counts as no mutation."""
        assert make_bridge().process(0, "/a", {"a": 0}, lambda mutate, *_: mutate([])) is None

    def test_invalid_request_aborts_before_applying(self):
        """Validation of the whole sequence precedes any patch."""
        applied = []

        def patcher(document, operation):
            applied.append(operation)
            return document

        bridge = MutationBridge(patcher)
        with pytest.raises(UnknownOperation):
            bridge.process(0, "/a", {"a": 0}, lambda mutate, *_: mutate([{"value": 1}, {"op": "bogus"}]))

        assert applied == []

    def test_malformed_entry_pointer(self):
        """A bad entry pointer fails when it becomes the default path."""
        with pytest.raises(MalformedPointer):
            make_bridge().process(0, "a", {"a": 0}, lambda mutate, *_: mutate({"op": "remove"}))

    def test_narrowed_operations(self):
        """Operations outside the narrowed set are rejected."""
        bridge = make_bridge(operations=frozenset({PatchOp.REPLACE}))

        with pytest.raises(UnknownOperation):
            bridge.process(0, "/a", {"a": 0}, lambda mutate, *_: mutate({"op": "remove"}))

    def test_patcher_errors_propagate(self):
        """Patcher errors reach the caller unchanged."""
        class Boom(Exception):
            pass

        def patcher(document, operation):
            raise Boom(operation["path"])

        with pytest.raises(Boom, match="/a"):
            MutationBridge(patcher).process(0, "/a", {}, lambda mutate, *_: mutate({"value": 1}))


class TestMutationBridgeDeferred:
    """Awaitable requests and async callbacks."""

    @pytest.mark.asyncio
    async def test_deferred_request(self):
        """An awaitable request is awaited before applying."""
        async def request():
            return {"value": 10}

        result = make_bridge().process(1, "/a", {"a": 1}, lambda mutate, *_: mutate(request()))

        assert (await result).document == {"a": 10}

    @pytest.mark.asyncio
    async def test_deferred_invalid_request_rejects(self):
        """Validation errors of an awaited request surface on await."""
        async def request():
            return {"op": "bogus"}

        result = make_bridge().process(1, "/a", {"a": 1}, lambda mutate, *_: mutate(request()))

        with pytest.raises(UnknownOperation):
            await result

    @pytest.mark.asyncio
    async def test_async_callback(self):
        """An async callback is awaited before its request is read."""
        async def process(mutate, value, pointer, document):
            mutate({"value": value + 1})

        result = make_bridge().process(1, "/a", {"a": 1}, process)

        assert (await result).document == {"a": 2}

    @pytest.mark.asyncio
    async def test_async_callback_without_mutation(self):
        """An async callback that never mutates resolves to ``None``."""
        async def process(mutate, value, pointer, document):
            return None

        assert await make_bridge().process(1, "/a", {"a": 1}, process) is None
