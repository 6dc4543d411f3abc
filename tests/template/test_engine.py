"""Тесты посимвольного движка разбора."""

from dataclasses import dataclass

import pytest

from occ.template.engine import EngineState, ParsingEngine
from occ.template.nodes import CommentTagNode, TextLiteralNode


@dataclass
class RecordingState(EngineState):
    upper: bool = False


def _consume(engine, current, state, node):
    node.content += current
    state.i += 1
    return True


class TestParsingEngine:

    def test_first_consuming_handler_wins(self):
        calls = []

        def first(engine, current, state, node):
            calls.append(("first", current))
            if current == "a":
                node.content += "A"
                state.i += 1
                return True
            return None

        def second(engine, current, state, node):
            calls.append(("second", current))
            return _consume(engine, current, state, node)

        node = ParsingEngine(RecordingState(), TextLiteralNode()).use(first).use(second).run("ab")

        assert node.content == "Ab"
        assert calls == [("first", "a"), ("first", "b"), ("second", "b")]

    def test_end_handlers_run_in_reverse_order(self):
        order = []

        engine = (
            ParsingEngine(RecordingState(), TextLiteralNode())
            .use(_consume)
            .end(lambda engine, state, node: order.append("registered first"))
            .end(lambda engine, state, node: order.append("registered second"))
        )
        engine.run("x")

        assert order == ["registered second", "registered first"]

    def test_end_handler_can_stop_chain(self):
        order = []

        engine = (
            ParsingEngine(RecordingState(), TextLiteralNode())
            .end(lambda engine, state, node: order.append("never"))
            .end(lambda engine, state, node: order.append("stop") or True)
        )
        engine.run("")

        assert order == ["stop"]

    def test_finished_stops_iteration(self):
        def stop_on_dot(engine, current, state, node):
            if current == ".":
                state.finished = True
                state.i += 1
                return True
            return None

        engine = ParsingEngine(RecordingState(), TextLiteralNode()).use(stop_on_dot).use(_consume)
        node = engine.run("ab.cd")

        assert node.content == "ab"
        assert engine.state.i == 3

    def test_replaced_node_is_seen_by_later_handlers(self):
        def reclassify(engine, current, state, node):
            if current == "!" and state.i == 0:
                engine.node = CommentTagNode(text_length=1)
                state.i += 1
                return True
            return None

        def collect(engine, current, state, node):
            node.comment_text += current
            state.i += 1
            return True

        node = ParsingEngine(RecordingState(), TextLiteralNode()).use(reclassify).use(collect).run("!hey")

        assert isinstance(node, CommentTagNode)
        assert node.comment_text == "hey"
        assert node.text_length == 1

    def test_handler_that_never_advances_is_a_bug(self):
        engine = ParsingEngine(RecordingState(), TextLiteralNode()).use(lambda engine, current, state, node: True)

        with pytest.raises(RuntimeError):
            engine.run("a")

    def test_run_from_offset(self):
        engine = ParsingEngine(RecordingState(), TextLiteralNode()).use(_consume)
        node = engine.run("skip:abc", 5)

        assert node.content == "abc"
        assert engine.state.i == 3
